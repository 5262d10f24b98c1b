# SPDX-License-Identifier: MIT
"""Test configuration for request-versions.

Logfire is configured locally so spans and metrics are created without any
network export or console noise.
"""

from __future__ import annotations

import os
from typing import Any

import logfire
import pytest

logfire.configure(send_to_logfire=False, console=False)

from request_versions.observability import telemetry  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_telemetry():
    """Start and finish every test with empty run metrics."""
    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop ``RV_`` variables inherited from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("RV_"):
            monkeypatch.delenv(name, raising=False)


def legacy_record(**overrides: Any) -> dict[str, Any]:
    """Return an untagged version 0 record."""
    record: dict[str, Any] = {
        "url": "https://api.example.com",
        "path": "/users",
        "headers": [{"key": "Accept", "value": "application/json", "active": True}],
        "params": [{"key": "page", "value": "1", "active": True}],
        "name": "List users",
        "method": "GET",
        "preRequestScript": "",
        "testScript": "",
        "contentType": "application/json",
        "body": "",
        "rawParams": '{"q": 1}',
        "auth": "None",
    }
    record.update(overrides)
    return record


def current_record(**overrides: Any) -> dict[str, Any]:
    """Return a version 7 record in wire form."""
    record: dict[str, Any] = {
        "v": "7",
        "name": "List users",
        "method": "GET",
        "endpoint": "https://api.example.com/users",
        "headers": [{"key": "Accept", "value": "application/json", "active": True}],
        "params": [],
        "preRequestScript": "",
        "testScript": "",
        "auth": {"authType": "none", "authActive": True},
        "body": {"contentType": None, "body": None},
        "requestVariables": [],
        "_ref_id": "ref-1",
    }
    record.update(overrides)
    return record


@pytest.fixture()
def make_legacy():
    """Factory for untagged version 0 records."""
    return legacy_record


@pytest.fixture()
def make_current():
    """Factory for version 7 records in wire form."""
    return current_record
