# SPDX-License-Identifier: MIT
"""Version 4: API key placement uses the same constants as OAuth 2."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel

from ._base import retag, wire_dump
from .v1 import (
    RestAuthAPIKeyV1,
    RestAuthBasic,
    RestAuthBearer,
    RestAuthInherit,
    RestAuthNone,
)
from .v3 import RestAuthOAuth2V3, RestRequestV3

# Placement labels written by earlier clients, plus the current constants.
_ADD_TO = {
    "Headers": "HEADERS",
    "Query params": "QUERY_PARAMS",
    "HEADERS": "HEADERS",
    "QUERY_PARAMS": "QUERY_PARAMS",
}


class RestAuthAPIKey(WireModel):
    auth_type: Literal["api-key"]
    auth_active: bool
    key: str
    value: str
    add_to: Literal["HEADERS", "QUERY_PARAMS"]


RestAuthV4 = Annotated[
    RestAuthNone
    | RestAuthInherit
    | RestAuthBasic
    | RestAuthBearer
    | RestAuthOAuth2V3
    | RestAuthAPIKey,
    Field(discriminator="auth_type"),
]


class RestRequestV4(RestRequestV3):
    v: Literal["4"]  # type: ignore[assignment]
    auth: RestAuthV4  # type: ignore[assignment]


def upgrade(old: RestRequestV3) -> RestRequestV4:
    auth = old.auth
    if isinstance(auth, RestAuthAPIKeyV1):
        migrated = wire_dump(auth)
        # Unrecognised placements fall back to headers, the old client default.
        migrated["addTo"] = _ADD_TO.get(auth.add_to, "HEADERS")
        return retag(old, RestRequestV4, 4, auth=migrated)
    return retag(old, RestRequestV4, 4)


VERSION = VersionModule(version=4, schema=RestRequestV4, upgrade=upgrade)

__all__ = ["RestAuthAPIKey", "RestAuthV4", "RestRequestV4", "VERSION", "upgrade"]
