# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Method and parameter models materialised from the catalog document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import CatalogIntegrityError
from .types import JSONValue
from .utils import expect_string, mapping_array, optional_bool, optional_string


class ParamType(str, Enum):
    """Enumerate the parameter types the argument validator understands."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"
    OTHER = "other"

    @classmethod
    def from_declared(cls, declared: str) -> ParamType:
        """Return the member matching ``declared`` exactly; anything else maps to ``OTHER``.

        Args:
            declared: Type string exactly as written in the catalog document.

        Returns:
            ParamType: Matching enum member.
        """
        try:
            return cls(declared)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """Declarative parameter accepted by a catalog method."""

    name: str
    param_type: ParamType
    declared_type: str
    required: bool
    description: str | None = None

    @staticmethod
    def from_mapping(data: Mapping[str, JSONValue], *, context: str) -> ParamSpec:
        """Create a ``ParamSpec`` from JSON data.

        Args:
            data: Mapping describing a single parameter.
            context: Human-readable context used in error messages.

        Returns:
            ParamSpec: Frozen parameter definition.

        Raises:
            CatalogIntegrityError: If required parameter metadata is missing or invalid.
        """

        name_value = expect_string(data.get("name"), key="name", context=context)
        declared_value = expect_string(data.get("type"), key="type", context=context)
        return ParamSpec(
            name=name_value,
            param_type=ParamType.from_declared(declared_value),
            declared_type=declared_value,
            required=optional_bool(data.get("required"), key="required", context=context, default=False),
            description=optional_string(data.get("description"), key="description", context=context),
        )

    def describe(self) -> str:
        """Return ``name: type`` with optional parameters wrapped in brackets."""

        text = f"{self.name}: {self.declared_type}"
        return text if self.required else f"[{text}]"


@dataclass(frozen=True, slots=True)
class MethodSpec:
    """Remote operation exposed by the API together with its ordered parameters."""

    name: str
    params: tuple[ParamSpec, ...]
    description: str | None = None

    @staticmethod
    def from_mapping(data: Mapping[str, JSONValue], *, context: str) -> MethodSpec:
        """Create a ``MethodSpec`` from JSON data.

        Args:
            data: Mapping describing one catalog method.
            context: Human-readable context used in error messages.

        Returns:
            MethodSpec: Frozen method definition with a canonical lowercase name.

        Raises:
            CatalogIntegrityError: If the mapping is malformed or declares a parameter twice.
        """

        name_value = expect_string(data.get("name"), key="name", context=context).strip().lower()
        method_context = f"{context}[{name_value}]"
        params: list[ParamSpec] = []
        seen: set[str] = set()
        for index, entry in enumerate(mapping_array(data.get("params"), key="params", context=method_context)):
            param = ParamSpec.from_mapping(entry, context=f"{method_context}.params[{index}]")
            if param.name in seen:
                raise CatalogIntegrityError(f"{method_context}: duplicate parameter '{param.name}'")
            seen.add(param.name)
            params.append(param)
        return MethodSpec(
            name=name_value,
            params=tuple(params),
            description=optional_string(data.get("description"), key="description", context=method_context),
        )

    @property
    def required_params(self) -> tuple[ParamSpec, ...]:
        """Return the parameters declared as required, in declaration order."""

        return tuple(param for param in self.params if param.required)

    @property
    def required_count(self) -> int:
        """Return how many parameters must be supplied by the caller."""

        return len(self.required_params)

    @property
    def param_names(self) -> tuple[str, ...]:
        """Return parameter names in declaration order."""

        return tuple(param.name for param in self.params)

    def signature(self) -> str:
        """Return a human-readable call signature such as ``domain.delete(domainid: integer)``."""

        return f"{self.name}({', '.join(param.describe() for param in self.params)})"


__all__ = ["MethodSpec", "ParamSpec", "ParamType"]
