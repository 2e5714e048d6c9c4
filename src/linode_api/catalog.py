# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Method catalog loaded once per client from the declarative API document."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

from .errors import CatalogIntegrityError, UnknownMethodError
from .io import load_document
from .model_method import MethodSpec
from .schema import DATA_ROOT, CatalogSchema
from .types import CATALOG_SCHEMA_VERSION, JSONValue
from .utils import mapping_array

LOGGER = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH: Final[Path] = DATA_ROOT / "api.json"
WORD_SEPARATOR: Final[str] = "_"
PATH_SEPARATOR: Final[str] = "."


def normalize_method_name(name: str) -> str:
    """Return the canonical catalog key for a symbolic call name.

    Args:
        name: Name as written by the caller, e.g. ``Domain_Resource_List``.

    Returns:
        str: Lowercase dot-separated name, e.g. ``domain.resource.list``.
    """

    return name.strip().lower().replace(WORD_SEPARATOR, PATH_SEPARATOR)


@dataclass(frozen=True, slots=True)
class MethodCatalog:
    """Immutable lookup table of the remote operations supported by the API."""

    _methods: tuple[MethodSpec, ...]
    source: str = "<memory>"
    _index: Mapping[str, MethodSpec] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Index methods by name and reject duplicate declarations."""

        index: dict[str, MethodSpec] = {}
        for method in self._methods:
            if method.name in index:
                raise CatalogIntegrityError(f"{self.source}: duplicate method '{method.name}'")
            index[method.name] = method
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def load(
        cls,
        document_path: Path | None = None,
        *,
        schema_path: Path | None = None,
    ) -> MethodCatalog:
        """Read, validate and materialise a catalog document.

        Args:
            document_path: Catalog document; defaults to the bundled ``api.json``.
            schema_path: JSON schema used for validation; defaults to the bundled schema.

        Returns:
            MethodCatalog: Catalog built from the document.

        Raises:
            CatalogIntegrityError: If the document is missing, unreadable or semantically invalid.
            CatalogValidationError: If the document does not satisfy the schema.
        """

        path = document_path or DEFAULT_CATALOG_PATH
        document = load_document(path)
        CatalogSchema.load(schema_path).validate(document, source=str(path))
        catalog = cls.from_mapping(document, source=str(path))
        LOGGER.debug("loaded %d methods from %s", len(catalog), path)
        return catalog

    @classmethod
    def from_mapping(cls, document: Mapping[str, JSONValue], *, source: str = "<memory>") -> MethodCatalog:
        """Build a catalog from an already decoded document without schema validation.

        Args:
            document: Decoded catalog document containing a ``methods`` array.
            source: Document origin used in error messages.

        Returns:
            MethodCatalog: Catalog built from ``document``.

        Raises:
            CatalogIntegrityError: If the document structure or ``schemaVersion`` is invalid.
        """

        version = document.get("schemaVersion")
        if version is not None and version != CATALOG_SCHEMA_VERSION:
            raise CatalogIntegrityError(
                f"{source}: unsupported schemaVersion {version!r} (expected {CATALOG_SCHEMA_VERSION!r})",
            )
        entries = mapping_array(document.get("methods"), key="methods", context=source)
        methods = tuple(
            MethodSpec.from_mapping(entry, context=f"{source}.methods[{index}]")
            for index, entry in enumerate(entries)
        )
        return cls(_methods=methods, source=source)

    def lookup(self, name: str) -> MethodSpec:
        """Return the method registered for the symbolic ``name``.

        Raises:
            UnknownMethodError: If no method matches ``name`` after normalisation.
        """

        key = normalize_method_name(name)
        try:
            return self._index[key]
        except KeyError:
            raise UnknownMethodError(key) from None

    @property
    def methods(self) -> tuple[MethodSpec, ...]:
        """Return the methods in document order."""

        return self._methods

    @property
    def names(self) -> tuple[str, ...]:
        """Return the canonical method names in document order."""

        return tuple(method.name for method in self._methods)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_method_name(name) in self._index

    def __iter__(self) -> Iterator[MethodSpec]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)


__all__ = ["DEFAULT_CATALOG_PATH", "MethodCatalog", "normalize_method_name"]
