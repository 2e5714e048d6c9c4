# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for loading and querying the method catalog."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from linode_api import MethodCatalog, ParamType, normalize_method_name
from linode_api.catalog import DEFAULT_CATALOG_PATH
from linode_api.errors import (
    CatalogIntegrityError,
    CatalogValidationError,
    ConfigurationError,
    UnknownMethodError,
)


def test_bundled_catalog_loads_and_validates() -> None:
    catalog = MethodCatalog.load()

    assert catalog.source == str(DEFAULT_CATALOG_PATH)
    assert "domain.list" in catalog
    create = catalog.lookup("domain.create")
    assert [param.name for param in create.required_params] == ["domain", "type"]
    assert create.params[0].param_type is ParamType.STRING
    assert catalog.lookup("domain.list").required_count == 0


def test_bundled_catalog_method_names_are_canonical() -> None:
    catalog = MethodCatalog.load()

    for name in catalog.names:
        assert name == name.lower()
        assert "_" not in name


def test_load_from_path(catalog_file: Path) -> None:
    catalog = MethodCatalog.load(catalog_file)

    assert catalog.names == (
        "domain.list",
        "domain.create",
        "domain.resource.list",
        "linode.update",
        "stackscript.create",
    )
    assert len(catalog) == 5


@pytest.mark.parametrize(
    ("symbolic", "expected"),
    [
        ("domain_list", "domain.list"),
        ("Domain_Resource_List", "domain.resource.list"),
        ("LINODE.UPDATE", "linode.update"),
        ("  domain.create ", "domain.create"),
    ],
)
def test_lookup_normalizes_symbolic_names(catalog: MethodCatalog, symbolic: str, expected: str) -> None:
    assert normalize_method_name(symbolic) == expected
    assert catalog.lookup(symbolic).name == expected
    assert symbolic in catalog


def test_lookup_unknown_method_raises(catalog: MethodCatalog) -> None:
    with pytest.raises(UnknownMethodError, match="dns.doesnotexist") as excinfo:
        catalog.lookup("dns_doesnotexist")

    assert excinfo.value.method == "dns.doesnotexist"
    assert "dns.doesnotexist" not in catalog


def test_unrecognised_types_map_to_other(catalog: MethodCatalog) -> None:
    udf = catalog.lookup("stackscript.create").params[1]

    assert udf.param_type is ParamType.OTHER
    assert udf.declared_type == "json"
    assert udf.required is False


def test_signature_marks_optional_params(catalog: MethodCatalog) -> None:
    assert catalog.lookup("domain.create").signature() == (
        "domain.create(domain: string, type: string, [soa_email: string])"
    )


def test_duplicate_method_names_are_rejected(catalog_document: dict[str, object]) -> None:
    methods = list(catalog_document["methods"])  # type: ignore[call-overload]
    methods.append({"name": "Domain.List", "params": []})

    with pytest.raises(CatalogIntegrityError, match="duplicate method 'domain.list'"):
        MethodCatalog.from_mapping({"methods": methods})


def test_duplicate_param_names_are_rejected() -> None:
    document = {
        "methods": [
            {
                "name": "domain.delete",
                "params": [
                    {"name": "domainid", "type": "integer"},
                    {"name": "domainid", "type": "integer"},
                ],
            },
        ],
    }

    with pytest.raises(CatalogIntegrityError, match="duplicate parameter 'domainid'"):
        MethodCatalog.from_mapping(document)


def test_missing_document_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        MethodCatalog.load(tmp_path / "missing.json")


def test_malformed_document_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "api.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogIntegrityError, match="failed to parse"):
        MethodCatalog.load(path)


def test_schema_violation_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "api.json"
    path.write_text(
        json.dumps(
            {
                "schemaVersion": "1.0.0",
                "methods": [{"name": "domain.list", "params": [{"name": "domainid", "required": True}]}],
            },
        ),
        encoding="utf-8",
    )

    with pytest.raises(CatalogValidationError, match="type"):
        MethodCatalog.load(path)


def test_custom_schema_path(tmp_path: Path, catalog_file: Path) -> None:
    schema = tmp_path / "strict.schema.json"
    schema.write_text(json.dumps({"type": "object", "required": ["owner"]}), encoding="utf-8")

    with pytest.raises(CatalogValidationError, match="owner"):
        MethodCatalog.load(catalog_file, schema_path=schema)


def test_unsupported_schema_version_is_rejected(catalog_document: dict[str, object]) -> None:
    document = dict(catalog_document, schemaVersion="2.0.0")

    with pytest.raises(CatalogIntegrityError, match="unsupported schemaVersion '2.0.0'"):
        MethodCatalog.from_mapping(document, source="fixture")


def test_declared_types_match_exactly() -> None:
    assert ParamType.from_declared("boolean") is ParamType.BOOLEAN
    assert ParamType.from_declared("Boolean") is ParamType.OTHER
    assert ParamType.from_declared(" integer") is ParamType.OTHER
