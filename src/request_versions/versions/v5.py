# SPDX-License-Identifier: MIT
"""Version 5: AWS signature auth and PKCE flows without a client secret."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel

from ._base import retag
from .v1 import RestAuthBasic, RestAuthBearer, RestAuthInherit, RestAuthNone
from .v3 import (
    ClientCredentialsGrantTypeParams,
    ImplicitOauthFlowParams,
    PasswordGrantTypeParams,
)
from .v4 import RestAuthAPIKey, RestRequestV4


class AuthCodeGrantTypeParams(WireModel):
    grant_type: Literal["AUTHORIZATION_CODE"]
    auth_endpoint: str
    token_endpoint: str
    client_id: str = Field(alias="clientID")
    client_secret: str | None = None
    scopes: str | None = None
    is_pkce: bool = Field(alias="isPKCE")
    code_verifier_method: Literal["plain", "S256"] | None = None
    token: str


GrantTypeInfo = Annotated[
    AuthCodeGrantTypeParams
    | ClientCredentialsGrantTypeParams
    | PasswordGrantTypeParams
    | ImplicitOauthFlowParams,
    Field(discriminator="grant_type"),
]


class RestAuthOAuth2(WireModel):
    auth_type: Literal["oauth-2"]
    auth_active: bool
    grant_type_info: GrantTypeInfo
    add_to: Literal["HEADERS", "QUERY_PARAMS"] = "HEADERS"


class RestAuthAWSSignature(WireModel):
    auth_type: Literal["aws-signature"]
    auth_active: bool
    access_key: str
    secret_key: str
    region: str
    service_name: str
    service_token: str | None = None
    add_to: Literal["HEADERS", "QUERY_PARAMS"]


RestAuth = Annotated[
    RestAuthNone
    | RestAuthInherit
    | RestAuthBasic
    | RestAuthBearer
    | RestAuthOAuth2
    | RestAuthAPIKey
    | RestAuthAWSSignature,
    Field(discriminator="auth_type"),
]


class RestRequestV5(RestRequestV4):
    v: Literal["5"]  # type: ignore[assignment]
    auth: RestAuth  # type: ignore[assignment]


def upgrade(old: RestRequestV4) -> RestRequestV5:
    # Every version 4 auth shape is still valid; only the tag changes.
    return retag(old, RestRequestV5, 5)


VERSION = VersionModule(version=5, schema=RestRequestV5, upgrade=upgrade)

__all__ = [
    "AuthCodeGrantTypeParams",
    "GrantTypeInfo",
    "RestAuth",
    "RestAuthAWSSignature",
    "RestAuthOAuth2",
    "RestRequestV5",
    "VERSION",
    "upgrade",
]
