# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating method catalog documents."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Final, Protocol, cast, runtime_checkable

from .errors import CatalogValidationError
from .io import load_schema
from .types import JSONValue

DATA_ROOT: Final[Path] = Path(__file__).resolve().parent / "data"
DEFAULT_SCHEMA_PATH: Final[Path] = DATA_ROOT / "api.schema.json"


@runtime_checkable
class SchemaValidator(Protocol):
    """Protocol describing the minimal interface exposed by jsonschema validators."""

    def validate(self, instance: JSONValue) -> None:
        """Validate ``instance`` against the bound schema.

        Args:
            instance: JSON payload to validate against the schema.

        Raises:
            Exception: Implementations may raise jsonschema validation errors when invalid.
        """


SchemaValidatorFactory = Callable[[JSONValue], SchemaValidator]


jsonschema_module = importlib.import_module("jsonschema")
jsonschema_exceptions: ModuleType = cast(ModuleType, jsonschema_module.exceptions)
Draft202012Validator = cast(SchemaValidatorFactory, jsonschema_module.Draft202012Validator)
JsonSchemaValidationError = cast(type[Exception], getattr(jsonschema_exceptions, "ValidationError"))


@dataclass(slots=True)
class CatalogSchema:
    """Hold the jsonschema validator used to check catalog documents."""

    schema_path: Path
    validator: SchemaValidator

    @classmethod
    def load(cls, schema_path: Path | None = None) -> CatalogSchema:
        """Load the catalog schema validator from disk.

        Args:
            schema_path: Optional override for the bundled schema file.

        Returns:
            CatalogSchema: Schema wrapper bound to a Draft 2020-12 validator.
        """
        resolved = schema_path or DEFAULT_SCHEMA_PATH
        return cls(schema_path=resolved, validator=Draft202012Validator(load_schema(resolved)))

    def validate(self, document: JSONValue, *, source: str) -> None:
        """Validate ``document`` and raise a catalog error describing the first failure.

        Args:
            document: Decoded catalog document.
            source: Document origin used in error messages.

        Raises:
            CatalogValidationError: When the document fails schema validation.
        """
        try:
            self.validator.validate(document)
        except JsonSchemaValidationError as exc:
            message = getattr(exc, "message", str(exc))
            location = "/".join(str(part) for part in getattr(exc, "absolute_path", ()))
            where = f" at '{location}'" if location else ""
            raise CatalogValidationError(f"{source}{where}: {message}") from exc


__all__ = ["DATA_ROOT", "DEFAULT_SCHEMA_PATH", "CatalogSchema", "SchemaValidator"]
