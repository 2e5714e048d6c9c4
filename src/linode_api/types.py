# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for the Linode API client."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]
ParameterValue: TypeAlias = str | int | float | bool

CATALOG_SCHEMA_VERSION: Final[str] = "1.0.0"

API_KEY_FIELD: Final[str] = "api_key"
API_FORMAT_FIELD: Final[str] = "api_responseFormat"
API_ACTION_FIELD: Final[str] = "api_action"
API_REQUEST_ARRAY_FIELD: Final[str] = "api_requestArray"
BATCH_ACTION: Final[str] = "batch"

__all__ = [
    "API_ACTION_FIELD",
    "API_FORMAT_FIELD",
    "API_KEY_FIELD",
    "API_REQUEST_ARRAY_FIELD",
    "BATCH_ACTION",
    "CATALOG_SCHEMA_VERSION",
    "JSONPrimitive",
    "JSONValue",
    "ParameterValue",
]
