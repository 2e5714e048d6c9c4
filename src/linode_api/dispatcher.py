# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Send resolved calls immediately or defer them into a batch."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .batch import BatchCache
from .decoding import ResponseFormat, api_errors, decode_body
from .errors import ApiError
from .resolver import ResolvedCall
from .transport import Transport
from .types import (
    API_ACTION_FIELD,
    API_FORMAT_FIELD,
    API_KEY_FIELD,
    API_REQUEST_ARRAY_FIELD,
    BATCH_ACTION,
    JSONValue,
    ParameterValue,
)

LOGGER = logging.getLogger(__name__)

_REDACTED: Final[str] = "***"


def json_safe(value: object) -> JSONValue:
    """Return ``value`` with every node reduced to something ``json.dumps`` accepts.

    Mappings become dicts with string keys, sequences become lists and any
    other non-JSON object becomes its ``str()`` form.
    """

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return str(value)


def wire_value(value: object) -> str:
    """Return the form-field representation of a resolved parameter value."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(json_safe(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class RequestEnvelope:
    """Complete set of form fields for one physical request, built fresh per dispatch."""

    action: str
    fields: Mapping[str, str]

    @classmethod
    def build(
        cls,
        *,
        api_key: str,
        response_format: ResponseFormat,
        action: str,
        parameters: Mapping[str, ParameterValue] | None = None,
    ) -> RequestEnvelope:
        """Merge control fields with call parameters into an immutable envelope.

        Control fields are written last so a parameter can never override them.
        """

        fields = {name: wire_value(value) for name, value in (parameters or {}).items()}
        fields[API_KEY_FIELD] = api_key
        fields[API_FORMAT_FIELD] = response_format.value
        fields[API_ACTION_FIELD] = action
        return cls(action=action, fields=MappingProxyType(fields))

    def redacted(self) -> dict[str, str]:
        """Return the fields with the credential masked for logging."""

        return {name: _REDACTED if name == API_KEY_FIELD else value for name, value in self.fields.items()}


class RequestDispatcher:
    """Route resolved calls to the transport or the batch cache.

    Instances hold per-client session state and are not safe for concurrent
    use; callers sharing a client across threads must serialise access.
    """

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        transport: Transport,
        response_format: ResponseFormat = ResponseFormat.JSON,
        batching: bool = False,
        raise_api_errors: bool = False,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._transport = transport
        self._response_format = response_format
        self._raise_api_errors = raise_api_errors
        self._cache = BatchCache()
        self.batching = batching

    @property
    def cache(self) -> BatchCache:
        return self._cache

    @property
    def response_format(self) -> ResponseFormat:
        return self._response_format

    def dispatch(self, call: ResolvedCall) -> JSONValue | None:
        """Send ``call`` now, or queue it when batching is enabled.

        Args:
            call: Validated call produced by the argument resolver.

        Returns:
            JSONValue | None: Decoded response, or ``None`` when the call was queued.

        Raises:
            TransportError: If the HTTP exchange fails.
            DecodeError: If the response body cannot be decoded.
            ApiError: If ``raise_api_errors`` is enabled and the API reports errors.
        """

        if self.batching:
            entry = {name: json_safe(value) for name, value in call.parameters.items()}
            entry[API_ACTION_FIELD] = call.method_name
            self._cache.append(entry)
            LOGGER.debug("queued %s for batch (%d pending)", call.method_name, len(self._cache))
            return None
        envelope = RequestEnvelope.build(
            api_key=self._api_key,
            response_format=self._response_format,
            action=call.method_name,
            parameters=call.parameters,
        )
        return self._execute(envelope)

    def flush(self) -> JSONValue:
        """Send every queued call as one ``batch`` request and empty the cache.

        The cache is emptied only once a response has been received, so a
        failed flush can be retried.

        Returns:
            JSONValue: Decoded batch response.
        """

        entries = self._cache.entries()
        envelope = RequestEnvelope.build(
            api_key=self._api_key,
            response_format=self._response_format,
            action=BATCH_ACTION,
            parameters={API_REQUEST_ARRAY_FIELD: json.dumps(list(entries))},
        )
        LOGGER.debug("flushing batch of %d call(s)", len(entries))
        body = self._send(envelope)
        self._cache.clear()
        return self._decode(envelope, body)

    def close(self) -> None:
        self._transport.close()

    def _execute(self, envelope: RequestEnvelope) -> JSONValue:
        return self._decode(envelope, self._send(envelope))

    def _send(self, envelope: RequestEnvelope) -> bytes:
        LOGGER.debug("POST %s %s", self._endpoint, envelope.redacted())
        return self._transport.send(self._endpoint, envelope.fields)

    def _decode(self, envelope: RequestEnvelope, body: bytes) -> JSONValue:
        result = decode_body(body, self._response_format)
        if self._raise_api_errors and self._response_format is ResponseFormat.JSON:
            errors = api_errors(result)
            if errors:
                raise ApiError(errors, action=envelope.action)
        return result


__all__ = ["RequestDispatcher", "RequestEnvelope", "json_safe", "wire_value"]
