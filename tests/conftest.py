# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

import pytest

from linode_api import Client, ClientSettings, MethodCatalog

OK_BODY = json.dumps({"ERRORARRAY": [], "ACTION": "test", "DATA": {}}).encode("utf-8")


class RecordingTransport:
    """Transport double that records requests and replays canned bodies."""

    def __init__(self, *responses: bytes | Exception) -> None:
        self.requests: list[tuple[str, dict[str, str]]] = []
        self._responses = list(responses)
        self.closed = False

    def send(self, url: str, fields: Mapping[str, str]) -> bytes:
        self.requests.append((url, dict(fields)))
        if not self._responses:
            return OK_BODY
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def last_fields(self) -> dict[str, str]:
        return self.requests[-1][1]


@pytest.fixture
def catalog_document() -> dict[str, object]:
    """Return a small catalog document covering every parameter type."""
    return {
        "schemaVersion": "1.0.0",
        "methods": [
            {"name": "domain.list", "params": [{"name": "domainid", "type": "integer"}]},
            {
                "name": "domain.create",
                "params": [
                    {"name": "domain", "type": "string", "required": True},
                    {"name": "type", "type": "string", "required": True},
                    {"name": "soa_email", "type": "string"},
                ],
            },
            {
                "name": "domain.resource.list",
                "params": [
                    {"name": "domainid", "type": "integer", "required": True},
                    {"name": "resourceid", "type": "integer"},
                ],
            },
            {
                "name": "linode.update",
                "params": [
                    {"name": "linodeid", "type": "integer", "required": True},
                    {"name": "watchdog", "type": "boolean"},
                    {"name": "label", "type": "string"},
                ],
            },
            {
                "name": "stackscript.create",
                "params": [
                    {"name": "label", "type": "string", "required": True},
                    {"name": "udf", "type": "json"},
                    {"name": "script", "type": "string", "required": True},
                ],
            },
        ],
    }


@pytest.fixture
def catalog(catalog_document: dict[str, object]) -> MethodCatalog:
    return MethodCatalog.from_mapping(catalog_document, source="fixture")


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_document: dict[str, object]) -> Path:
    path = tmp_path / "api.json"
    path.write_text(json.dumps(catalog_document, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(catalog: MethodCatalog, transport: RecordingTransport) -> Client:
    return Client("secret-key", catalog=catalog, transport=transport, settings=ClientSettings())


@pytest.fixture
def batching_client(catalog: MethodCatalog, transport: RecordingTransport) -> Client:
    return Client("secret-key", batching=True, catalog=catalog, transport=transport)


@pytest.fixture
def transport_factory() -> type[RecordingTransport]:
    """Return the recording transport class for tests that script responses."""
    return RecordingTransport
