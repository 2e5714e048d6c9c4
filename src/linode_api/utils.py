# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for validating catalog JSON structures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import CatalogIntegrityError
from .types import JSONValue


def expect_string(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return ``value`` as a non-empty ``str`` or raise a catalog error.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str: Value as a string.

    Raises:
        CatalogIntegrityError: If ``value`` is not a non-empty string.
    """
    if not isinstance(value, str) or not value.strip():
        raise CatalogIntegrityError(f"{context}: expected '{key}' to be a non-empty string")
    return value


def optional_string(value: JSONValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string with validation.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str | None: ``value`` when present, otherwise ``None``.

    Raises:
        CatalogIntegrityError: If ``value`` is present but not a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise CatalogIntegrityError(f"{context}: expected '{key}' to be a string if present")
    return value


def optional_bool(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    default: bool | None = None,
) -> bool:
    """Return ``value`` coerced to ``bool`` with an optional default.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.
        default: Value returned when ``value`` is ``None``.

    Returns:
        bool: Boolean value derived from ``value`` or ``default``.

    Raises:
        CatalogIntegrityError: If ``value`` is not ``None`` and not a bool,
            or ``value`` is ``None`` and no ``default`` was provided.
    """
    if value is None:
        if default is None:
            raise CatalogIntegrityError(f"{context}: expected '{key}' to be a boolean")
        return default
    if isinstance(value, bool):
        return value
    raise CatalogIntegrityError(f"{context}: expected '{key}' to be a boolean")


def expect_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping of JSON values or raise an error.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        Mapping[str, JSONValue]: Mapping derived from ``value``.

    Raises:
        CatalogIntegrityError: If ``value`` is not a mapping.
    """
    if not isinstance(value, Mapping):
        raise CatalogIntegrityError(f"{context}: expected '{key}' to be an object")
    return value


def mapping_array(value: JSONValue | None, *, key: str, context: str) -> tuple[Mapping[str, JSONValue], ...]:
    """Return ``value`` as a tuple of JSON objects.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        tuple[Mapping[str, JSONValue], ...]: Objects contained in ``value``; empty when absent.

    Raises:
        CatalogIntegrityError: If ``value`` is not an array of objects.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise CatalogIntegrityError(f"{context}: expected '{key}' to be an array")
    return tuple(
        expect_mapping(item, key=f"{key}[{index}]", context=context) for index, item in enumerate(value)
    )


__all__ = [
    "expect_mapping",
    "expect_string",
    "mapping_array",
    "optional_bool",
    "optional_string",
]
