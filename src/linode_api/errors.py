# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by the Linode API client."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .types import JSONValue


class LinodeError(Exception):
    """Base class for every error raised by :mod:`linode_api`."""


class ConfigurationError(LinodeError):
    """Raised when the client cannot be constructed from the supplied configuration."""


class CatalogIntegrityError(ConfigurationError):
    """Raised when catalog metadata violates semantic invariants."""

    def __init__(self, message: str | None = None) -> None:
        """Create the integrity error with an optional ``message``."""

        super().__init__(message or "catalog integrity violation")


class CatalogValidationError(ConfigurationError):
    """Raised when a catalog document fails structural schema validation."""


class UnknownMethodError(LinodeError):
    """Raised when a symbolic call name is not present in the method catalog."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unknown method: {method}")
        self.method = method


class ArgumentError(LinodeError):
    """Raised when the supplied arguments cannot satisfy a method's parameters."""

    def __init__(self, message: str, *, method: str) -> None:
        super().__init__(message)
        self.method = method


class ParameterTypeError(LinodeError, TypeError):
    """Raised when an argument does not match the type declared by the catalog."""

    def __init__(self, message: str, *, parameter: str) -> None:
        super().__init__(message)
        self.parameter = parameter


class TransportError(LinodeError):
    """Raised when the HTTP exchange with the API endpoint fails.

    Attributes:
        code: Transport specific failure code (HTTP status or socket errno), ``0`` when unknown.
        message: Human-readable failure description.
    """

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(f"[{code}] {message}" if code else message)
        self.code = code
        self.message = message


class DecodeError(LinodeError):
    """Raised when a response body cannot be decoded into structured data."""

    def __init__(self, message: str, *, body: bytes | str) -> None:
        super().__init__(message)
        self.body = body


class ApiError(LinodeError):
    """Raised when the API reports failures in its ``ERRORARRAY`` envelope."""

    def __init__(self, errors: Sequence[Mapping[str, JSONValue]], *, action: str) -> None:
        details = "; ".join(
            f"{error.get('ERRORCODE', '?')}: {error.get('ERRORMESSAGE', '')}".rstrip() for error in errors
        )
        super().__init__(f"{action} failed: {details}")
        self.errors = tuple(errors)
        self.action = action


__all__ = (
    "ApiError",
    "ArgumentError",
    "CatalogIntegrityError",
    "CatalogValidationError",
    "ConfigurationError",
    "DecodeError",
    "LinodeError",
    "ParameterTypeError",
    "TransportError",
    "UnknownMethodError",
)
