# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public client exposing every catalog method through one dynamic entry point."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType

from .catalog import MethodCatalog
from .config import API_KEY_ENV, ClientSettings
from .dispatcher import RequestDispatcher
from .errors import ConfigurationError
from .model_method import MethodSpec
from .resolver import ResolvedCall, resolve_call
from .transport import Transport, UrllibTransport
from .types import JSONValue


class Client:
    """Schema-driven client for the Linode API.

    Any method in the catalog can be called through :meth:`invoke` or as an
    attribute, where underscores and attribute chains both map to the dotted
    method name::

        client.invoke("domain.create", "example.com", "master")
        client.domain_create(domain="example.com", type="master")
        client.domain.resource.list(domainid=42)

    With ``batching`` enabled calls are queued and sent together by :meth:`flush`.
    """

    def __init__(
        self,
        api_key: str | None,
        batching: bool = False,
        *,
        settings: ClientSettings | None = None,
        catalog: MethodCatalog | Path | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Validate the credential, load the catalog and prepare the dispatcher.

        Args:
            api_key: Linode API key sent with every request.
            batching: Queue calls until :meth:`flush` instead of sending them.
            settings: Connection and decoding settings; defaults apply when omitted.
            catalog: Prebuilt catalog or path to a catalog document; the bundled catalog otherwise.
            transport: Transport override; a :class:`UrllibTransport` is built from ``settings`` otherwise.

        Raises:
            ConfigurationError: If ``api_key`` is missing or the catalog cannot be loaded.
        """

        if api_key is None or not str(api_key).strip():
            raise ConfigurationError("You must set your api key")
        self._settings = settings or ClientSettings()
        self._catalog = catalog if isinstance(catalog, MethodCatalog) else MethodCatalog.load(catalog)
        self._dispatcher = RequestDispatcher(
            api_key=str(api_key),
            endpoint=self._settings.endpoint,
            transport=transport or UrllibTransport(self._settings.transport_options()),
            response_format=self._settings.response_format,
            batching=batching,
            raise_api_errors=self._settings.raise_api_errors,
        )

    @classmethod
    def from_env(
        cls,
        batching: bool = False,
        *,
        environ: Mapping[str, str] | None = None,
        **kwargs: object,
    ) -> Client:
        """Create a client from ``LINODE_API_KEY`` and the other ``LINODE_*`` variables."""

        source = os.environ if environ is None else environ
        settings = ClientSettings.from_env(source)
        return cls(source.get(API_KEY_ENV), batching, settings=settings, **kwargs)  # type: ignore[arg-type]

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def catalog(self) -> MethodCatalog:
        return self._catalog

    @property
    def batching(self) -> bool:
        return self._dispatcher.batching

    @batching.setter
    def batching(self, enabled: bool) -> None:
        self._dispatcher.batching = enabled

    @property
    def pending(self) -> int:
        """Return how many calls are waiting for :meth:`flush`."""

        return len(self._dispatcher.cache)

    def methods(self) -> tuple[str, ...]:
        return self._catalog.names

    def describe(self, name: str) -> MethodSpec:
        """Return the catalog entry behind the symbolic ``name``."""

        return self._catalog.lookup(name)

    def resolve(self, name: str, /, *args: object, **kwargs: object) -> ResolvedCall:
        """Validate a call without sending or queueing it."""

        return resolve_call(self._catalog.lookup(name), args, kwargs)

    def invoke(self, name: str, /, *args: object, **kwargs: object) -> JSONValue | None:
        """Call the catalog method ``name``.

        Arguments are either positional values in declaration order, a single
        mapping of parameter names, or keyword arguments.

        Returns:
            JSONValue | None: Decoded response, or ``None`` when the call was queued for a batch.

        Raises:
            UnknownMethodError: If ``name`` is not in the catalog.
            ArgumentError: If required arguments are missing.
            ParameterTypeError: If an argument has the wrong type.
            TransportError: If the request fails.
            DecodeError: If the response cannot be decoded.
        """

        return self._dispatcher.dispatch(self.resolve(name, *args, **kwargs))

    def flush(self) -> JSONValue:
        """Send all queued calls as one batch request and return the decoded response."""

        return self._dispatcher.flush()

    batch_flush = flush

    def close(self) -> None:
        self._dispatcher.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __getattr__(self, name: str) -> SymbolicCall:
        if name.startswith("_"):
            raise AttributeError(name)
        return SymbolicCall(self, name)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint={self._settings.endpoint!r}, "
            f"batching={self.batching}, methods={len(self._catalog)})"
        )


class SymbolicCall:
    """Callable placeholder for a method name built up through attribute access."""

    __slots__ = ("_client", "_name")

    def __init__(self, client: Client, name: str) -> None:
        self._client = client
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __getattr__(self, part: str) -> SymbolicCall:
        if part.startswith("_"):
            raise AttributeError(part)
        return SymbolicCall(self._client, f"{self._name}.{part}")

    def __call__(self, *args: object, **kwargs: object) -> JSONValue | None:
        return self._client.invoke(self._name, *args, **kwargs)

    def __repr__(self) -> str:
        return f"<SymbolicCall {self._name}>"


__all__ = ["Client", "SymbolicCall"]
