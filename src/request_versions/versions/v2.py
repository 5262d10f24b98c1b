# SPDX-License-Identifier: MIT
"""Version 2: adds request scoped variables."""

from __future__ import annotations

from typing import Literal

from request_versions.core.versioning import VersionModule

from ._base import retag
from .v0 import RestKeyValue
from .v1 import RestRequestV1

RestRequestVariables = list[RestKeyValue]


class RestRequestV2(RestRequestV1):
    v: Literal["2"]  # type: ignore[assignment]
    request_variables: RestRequestVariables


def upgrade(old: RestRequestV1) -> RestRequestV2:
    return retag(old, RestRequestV2, 2, requestVariables=[])


VERSION = VersionModule(version=2, schema=RestRequestV2, upgrade=upgrade)

__all__ = ["RestRequestV2", "RestRequestVariables", "VERSION", "upgrade"]
