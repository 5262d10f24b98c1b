# SPDX-License-Identifier: MIT
"""Version 0: the untagged request shape written before version tags existed.

The endpoint is split into ``url`` and ``path`` and authentication is a loose
set of optional string fields selected by a human readable ``auth`` label.
"""

from __future__ import annotations

from pydantic import Field

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel


class RestKeyValue(WireModel):
    """Header, query parameter or variable row."""

    key: str
    value: str
    active: bool


class RestRequestV0(WireModel):
    """Legacy request record."""

    id: str | None = None
    url: str
    path: str
    headers: list[RestKeyValue]
    params: list[RestKeyValue]
    name: str
    method: str
    pre_request_script: str
    test_script: str
    content_type: str
    body: str
    raw_params: str | None = None
    auth: str | None = Field(None, description="Label such as 'Basic Auth'.")
    http_user: str | None = None
    http_password: str | None = None
    bearer_token: str | None = None


VERSION = VersionModule(version=0, schema=RestRequestV0)

__all__ = ["RestKeyValue", "RestRequestV0", "VERSION"]
