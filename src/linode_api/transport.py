# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTP transport used to POST request fields to the API endpoint."""

from __future__ import annotations

import functools
import http.client
import logging
import socket
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal, Protocol, runtime_checkable
from urllib.parse import urlencode, urlparse

from .errors import TransportError

LOGGER = logging.getLogger(__name__)

IpFamily = Literal["ipv4", "ipv6", "any"]

_ADDRESS_FAMILIES: Final[dict[str, int]] = {
    "ipv4": socket.AF_INET,
    "ipv6": socket.AF_INET6,
    "any": socket.AF_UNSPEC,
}
_SECURE_SCHEMES: Final[frozenset[str]] = frozenset({"https"})
_INSECURE_SCHEMES: Final[frozenset[str]] = frozenset({"https", "http"})
_FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"


@runtime_checkable
class Transport(Protocol):
    """Synchronous POST executor consumed by the request dispatcher."""

    def send(self, url: str, fields: Mapping[str, str]) -> bytes:
        """POST ``fields`` to ``url`` and return the raw response body.

        Raises:
            TransportError: When the exchange fails or yields no body.
        """

    def close(self) -> None:
        """Release any connection resources held by the transport."""


@dataclass(frozen=True, slots=True)
class TransportOptions:
    """Fixed connection options applied to every request."""

    user_agent: str = "linode-api-python"
    verify_peer: bool = True
    ip_family: IpFamily = "ipv4"
    timeout: float = 30.0
    allow_insecure_scheme: bool = False


class UrllibTransport:
    """Default :class:`Transport` backed by :mod:`urllib.request`.

    The opener is built on the first request and reused until :meth:`close`.
    """

    def __init__(self, options: TransportOptions | None = None) -> None:
        self._options = options or TransportOptions()
        self._opener: urllib.request.OpenerDirector | None = None

    @property
    def options(self) -> TransportOptions:
        return self._options

    def send(self, url: str, fields: Mapping[str, str]) -> bytes:
        """POST ``fields`` form-encoded to ``url``.

        Args:
            url: Absolute API endpoint URL.
            fields: Flat mapping of request field names to string values.

        Returns:
            bytes: Raw response body.

        Raises:
            TransportError: If the scheme is not allowed, the exchange fails, or the body is empty.
        """

        parsed = urlparse(url)
        allowed = _INSECURE_SCHEMES if self._options.allow_insecure_scheme else _SECURE_SCHEMES
        if parsed.scheme.lower() not in allowed:
            raise TransportError(f"Unsupported URL scheme '{parsed.scheme}' for API endpoint {url}")
        request = urllib.request.Request(
            url,
            data=urlencode(fields).encode("utf-8"),
            headers={"User-Agent": self._options.user_agent, "Content-Type": _FORM_CONTENT_TYPE},
            method="POST",
        )
        try:
            with self._ensure_opener().open(request, timeout=self._options.timeout) as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as exc:
            raise TransportError(f"HTTP {exc.code}: {exc.reason}", code=exc.code) from exc
        except urllib.error.URLError as exc:
            raise TransportError(str(exc.reason), code=_errno_of(exc.reason)) from exc
        except http.client.HTTPException as exc:
            raise TransportError(f"{exc.__class__.__name__}: {exc}") from exc
        except OSError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__, code=exc.errno or 0) from exc
        if not body:
            raise TransportError(f"Empty response received from {url}")
        return body

    def close(self) -> None:
        if self._opener is not None:
            self._opener.close()
            self._opener = None

    def _ensure_opener(self) -> urllib.request.OpenerDirector:
        if self._opener is None:
            family = _ADDRESS_FAMILIES[self._options.ip_family]
            self._opener = urllib.request.build_opener(
                _FamilyHTTPSHandler(context=_ssl_context(self._options.verify_peer), address_family=family),
                _FamilyHTTPHandler(address_family=family),
            )
        return self._opener


def _ssl_context(verify_peer: bool) -> ssl.SSLContext:
    """Return a TLS context that verifies peers unless explicitly disabled."""

    context = ssl.create_default_context()
    if not verify_peer:
        LOGGER.warning("TLS peer verification is disabled for API requests")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _errno_of(reason: object) -> int:
    code = getattr(reason, "errno", None)
    return code if isinstance(code, int) else 0


def _create_connection(
    address: tuple[str, int],
    timeout: object,
    source_address: tuple[str, int] | None,
    *,
    family: int,
) -> socket.socket:
    """Open a TCP connection to ``address`` restricted to the ``family`` address family."""

    host, port = address
    last_error: OSError | None = None
    for af, socktype, proto, _canonname, sockaddr in socket.getaddrinfo(host, port, family, socket.SOCK_STREAM):
        sock = socket.socket(af, socktype, proto)
        try:
            if isinstance(timeout, (int, float)):
                sock.settimeout(timeout)
            if source_address:
                sock.bind(source_address)
            sock.connect(sockaddr)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    if last_error is not None:
        raise last_error
    raise OSError(f"getaddrinfo returned no addresses for {host}")


class _FamilyHTTPSConnection(http.client.HTTPSConnection):
    def __init__(self, *args: object, address_family: int, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self._create_connection = functools.partial(_create_connection, family=address_family)


class _FamilyHTTPConnection(http.client.HTTPConnection):
    def __init__(self, *args: object, address_family: int, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self._create_connection = functools.partial(_create_connection, family=address_family)


class _FamilyHTTPSHandler(urllib.request.HTTPSHandler):
    """HTTPS handler whose connections resolve hosts within one address family."""

    def __init__(self, *, context: ssl.SSLContext, address_family: int) -> None:
        super().__init__(context=context)
        self._context = context
        self._address_family = address_family

    def https_open(self, req: urllib.request.Request) -> http.client.HTTPResponse:
        connection = functools.partial(_FamilyHTTPSConnection, address_family=self._address_family)
        return self.do_open(connection, req, context=self._context)  # type: ignore[arg-type]


class _FamilyHTTPHandler(urllib.request.HTTPHandler):
    """Plain HTTP counterpart of :class:`_FamilyHTTPSHandler`."""

    def __init__(self, *, address_family: int) -> None:
        super().__init__()
        self._address_family = address_family

    def http_open(self, req: urllib.request.Request) -> http.client.HTTPResponse:
        connection = functools.partial(_FamilyHTTPConnection, address_family=self._address_family)
        return self.do_open(connection, req)  # type: ignore[arg-type]


__all__ = ["IpFamily", "Transport", "TransportOptions", "UrllibTransport"]
