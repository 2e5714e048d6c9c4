# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema-driven client for the Linode HTTP API."""

from __future__ import annotations

from typing import Final

__version__: Final[str] = "1.1.0"

from .batch import BatchCache  # noqa: E402
from .catalog import MethodCatalog, normalize_method_name  # noqa: E402
from .client import Client, SymbolicCall  # noqa: E402
from .config import ClientSettings  # noqa: E402
from .decoding import ResponseFormat, api_errors, decode_body  # noqa: E402
from .dispatcher import RequestDispatcher, RequestEnvelope  # noqa: E402
from .errors import (  # noqa: E402
    ApiError,
    ArgumentError,
    CatalogIntegrityError,
    CatalogValidationError,
    ConfigurationError,
    DecodeError,
    LinodeError,
    ParameterTypeError,
    TransportError,
    UnknownMethodError,
)
from .logging import configure_logging  # noqa: E402
from .model_method import MethodSpec, ParamSpec, ParamType  # noqa: E402
from .resolver import ResolvedCall, resolve_call  # noqa: E402
from .transport import Transport, TransportOptions, UrllibTransport  # noqa: E402
from .validation import validate_argument  # noqa: E402

__all__: Final[tuple[str, ...]] = (
    "ApiError",
    "ArgumentError",
    "BatchCache",
    "CatalogIntegrityError",
    "CatalogValidationError",
    "Client",
    "ClientSettings",
    "ConfigurationError",
    "DecodeError",
    "LinodeError",
    "MethodCatalog",
    "MethodSpec",
    "ParamSpec",
    "ParamType",
    "ParameterTypeError",
    "RequestDispatcher",
    "RequestEnvelope",
    "ResolvedCall",
    "ResponseFormat",
    "SymbolicCall",
    "Transport",
    "TransportError",
    "TransportOptions",
    "UnknownMethodError",
    "UrllibTransport",
    "__version__",
    "api_errors",
    "configure_logging",
    "decode_body",
    "normalize_method_name",
    "resolve_call",
    "validate_argument",
)
