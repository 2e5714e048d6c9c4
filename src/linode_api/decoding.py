# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Turn raw response bodies into structured values."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Final, cast

from .errors import DecodeError
from .types import JSONValue

ERROR_ARRAY_KEY: Final[str] = "ERRORARRAY"


class ResponseFormat(str, Enum):
    """Enumerate the response encodings the API can produce."""

    JSON = "json"
    WDDX = "wddx"
    HUMAN = "human"


def decode_body(body: bytes | str, response_format: ResponseFormat = ResponseFormat.JSON) -> JSONValue:
    """Decode ``body`` according to ``response_format``.

    JSON bodies are parsed into plain ``dict``/``list`` trees. Every other
    format is returned as text for the caller to interpret.

    Args:
        body: Raw response body returned by the transport.
        response_format: Format requested through ``api_responseFormat``.

    Returns:
        JSONValue: Parsed JSON value or the body as text.

    Raises:
        DecodeError: If the body is not valid UTF-8 or not valid JSON.
    """

    try:
        text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
    except UnicodeDecodeError as exc:
        raise DecodeError(f"response body is not valid UTF-8: {exc.reason}", body=body) from exc
    if response_format is not ResponseFormat.JSON:
        return text
    try:
        return cast(JSONValue, json.loads(text))
    except json.JSONDecodeError as exc:
        raise DecodeError(f"failed to decode JSON response: {exc.msg} (char {exc.pos})", body=body) from exc


def api_errors(result: JSONValue) -> tuple[Mapping[str, JSONValue], ...]:
    """Collect the ``ERRORARRAY`` entries reported by a decoded response.

    Batch responses are arrays of individual responses; their error arrays are
    concatenated in response order.

    Args:
        result: Value returned by :func:`decode_body`.

    Returns:
        tuple[Mapping[str, JSONValue], ...]: Reported errors, empty when the call succeeded.
    """

    if isinstance(result, Mapping):
        errors = result.get(ERROR_ARRAY_KEY)
        if isinstance(errors, Sequence) and not isinstance(errors, str):
            return tuple(error for error in errors if isinstance(error, Mapping))
        return ()
    if isinstance(result, Sequence) and not isinstance(result, str):
        collected: list[Mapping[str, JSONValue]] = []
        for item in result:
            collected.extend(api_errors(item))
        return tuple(collected)
    return ()


__all__ = ["ERROR_ARRAY_KEY", "ResponseFormat", "api_errors", "decode_body"]
