# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for immediate and batched request dispatch."""

from __future__ import annotations

import datetime
import json
import logging

import pytest

from linode_api import ApiError, RequestDispatcher, RequestEnvelope, ResolvedCall, ResponseFormat
from linode_api.batch import BatchCache
from linode_api.dispatcher import json_safe, wire_value
from linode_api.errors import TransportError

ENDPOINT = "https://api.linode.com/"


def _dispatcher(transport, **kwargs) -> RequestDispatcher:  # noqa: ANN001
    return RequestDispatcher(api_key="secret-key", endpoint=ENDPOINT, transport=transport, **kwargs)


def test_envelope_control_fields_win_over_parameters() -> None:
    envelope = RequestEnvelope.build(
        api_key="secret-key",
        response_format=ResponseFormat.JSON,
        action="linode.list",
        parameters={"api_action": "batch", "linodeid": 5, "watchdog": True},
    )

    assert dict(envelope.fields) == {
        "linodeid": "5",
        "watchdog": "true",
        "api_key": "secret-key",
        "api_responseFormat": "json",
        "api_action": "linode.list",
    }
    assert envelope.redacted()["api_key"] == "***"


def test_immediate_dispatch_sends_one_request(transport) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport)

    result = dispatcher.dispatch(ResolvedCall("domain.resource.list", {"domainid": 12}))

    assert result == {"ERRORARRAY": [], "ACTION": "test", "DATA": {}}
    assert transport.requests == [
        (
            ENDPOINT,
            {
                "domainid": "12",
                "api_key": "secret-key",
                "api_responseFormat": "json",
                "api_action": "domain.resource.list",
            },
        ),
    ]


def test_each_dispatch_builds_a_fresh_request(transport) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport)

    dispatcher.dispatch(ResolvedCall("domain.list", {"domainid": 1}))
    dispatcher.dispatch(ResolvedCall("domain.list", {}))

    assert "domainid" not in transport.last_fields


def test_batching_queues_calls_without_network(transport) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport, batching=True)

    assert dispatcher.dispatch(ResolvedCall("domain.list", {})) is None
    assert dispatcher.dispatch(ResolvedCall("linode.update", {"linodeid": 4, "watchdog": "false"})) is None

    assert transport.requests == []
    assert dispatcher.cache.entries() == (
        {"api_action": "domain.list"},
        {"linodeid": 4, "watchdog": "false", "api_action": "linode.update"},
    )


def test_flush_preserves_order_and_clears_cache(transport) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport, batching=True)
    dispatcher.dispatch(ResolvedCall("domain.create", {"domain": "a.example", "type": "master"}))
    dispatcher.dispatch(ResolvedCall("domain.list", {}))

    dispatcher.flush()

    fields = transport.last_fields
    assert fields["api_action"] == "batch"
    assert fields["api_key"] == "secret-key"
    assert [entry["api_action"] for entry in json.loads(fields["api_requestArray"])] == [
        "domain.create",
        "domain.list",
    ]
    assert len(dispatcher.cache) == 0

    dispatcher.flush()

    assert len(transport.requests) == 2
    assert json.loads(transport.last_fields["api_requestArray"]) == []


def test_failed_flush_keeps_queued_calls(transport_factory) -> None:  # noqa: ANN001
    transport = transport_factory(TransportError("connection reset", code=104))
    dispatcher = _dispatcher(transport, batching=True)
    dispatcher.dispatch(ResolvedCall("domain.list", {}))

    with pytest.raises(TransportError, match="connection reset") as excinfo:
        dispatcher.flush()

    assert excinfo.value.code == 104
    assert len(dispatcher.cache) == 1


def test_non_json_format_returns_text(transport_factory) -> None:  # noqa: ANN001
    transport = transport_factory(b"<wddxPacket version='1.0'/>")
    dispatcher = _dispatcher(transport, response_format=ResponseFormat.WDDX)

    result = dispatcher.dispatch(ResolvedCall("domain.list", {}))

    assert result == "<wddxPacket version='1.0'/>"
    assert transport.last_fields["api_responseFormat"] == "wddx"


def test_api_errors_raise_when_enabled(transport_factory) -> None:  # noqa: ANN001
    body = json.dumps(
        {"ERRORARRAY": [{"ERRORCODE": 4, "ERRORMESSAGE": "Authentication failed"}], "DATA": {}},
    ).encode()
    dispatcher = _dispatcher(transport_factory(body, body), raise_api_errors=True)

    with pytest.raises(ApiError, match="domain.list failed: 4: Authentication failed") as excinfo:
        dispatcher.dispatch(ResolvedCall("domain.list", {}))

    assert excinfo.value.errors[0]["ERRORCODE"] == 4
    lenient = _dispatcher(transport_factory(body))
    assert lenient.dispatch(ResolvedCall("domain.list", {}))["ERRORARRAY"]  # type: ignore[index]


def test_debug_log_masks_credential(transport, caplog: pytest.LogCaptureFixture) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport)

    with caplog.at_level(logging.DEBUG, logger="linode_api.dispatcher"):
        dispatcher.dispatch(ResolvedCall("domain.list", {}))

    assert "domain.list" in caplog.text
    assert "secret-key" not in caplog.text


def test_close_releases_transport(transport) -> None:  # noqa: ANN001
    _dispatcher(transport).close()

    assert transport.closed is True


def test_batch_cache_drain_and_copies() -> None:
    cache = BatchCache()
    entry = {"api_action": "domain.list"}
    cache.append(entry)
    entry["api_action"] = "changed"

    assert bool(cache) is True
    assert list(cache) == [{"api_action": "domain.list"}]
    assert cache.drain() == ({"api_action": "domain.list"},)
    assert len(cache) == 0
    assert not cache


def test_structured_values_are_json_encoded_on_the_wire() -> None:
    assert wire_value({"ssh": "on"}) == '{"ssh": "on"}'
    assert wire_value(["a", 1]) == '["a", 1]'
    assert wire_value(2.5) == "2.5"
    assert wire_value(None) == ""


def test_json_safe_reduces_unknown_objects_to_text() -> None:
    assert json_safe(datetime.date(2024, 1, 1)) == "2024-01-01"
    assert json_safe({1: ("a", {3})}) == {"1": ["a", "{3}"]}
    assert wire_value({"when": datetime.date(2024, 1, 1)}) == '{"when": "2024-01-01"}'


def test_batched_entries_hold_json_safe_values(transport) -> None:  # noqa: ANN001
    dispatcher = _dispatcher(transport, batching=True)

    dispatcher.dispatch(ResolvedCall("stackscript.create", {"label": "x", "udf": datetime.date(2024, 1, 1)}))

    assert dispatcher.cache.entries() == ({"label": "x", "udf": "2024-01-01", "api_action": "stackscript.create"},)
    dispatcher.flush()
    assert len(dispatcher.cache) == 0
