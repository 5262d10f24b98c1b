# SPDX-License-Identifier: MIT
"""Version 3: OAuth 2 settings are split by grant type.

The flat OAuth 2 fields of earlier versions only described the authorization
code flow, so upgraded records become an ``AUTHORIZATION_CODE`` grant with an
empty client secret and PKCE disabled.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel

from ._base import retag
from .v1 import (
    RestAuthAPIKeyV1,
    RestAuthBasic,
    RestAuthBearer,
    RestAuthInherit,
    RestAuthNone,
    RestAuthOAuth2V1,
)
from .v2 import RestRequestV2


class AuthCodeGrantTypeParamsV3(WireModel):
    grant_type: Literal["AUTHORIZATION_CODE"]
    auth_endpoint: str
    token_endpoint: str
    client_id: str = Field(alias="clientID")
    client_secret: str
    scopes: str | None = None
    is_pkce: bool = Field(alias="isPKCE")
    code_verifier_method: Literal["plain", "S256"] | None = None
    token: str


class ClientCredentialsGrantTypeParams(WireModel):
    grant_type: Literal["CLIENT_CREDENTIALS"]
    auth_endpoint: str
    client_id: str = Field(alias="clientID")
    client_secret: str
    scopes: str | None = None
    token: str


class PasswordGrantTypeParams(WireModel):
    grant_type: Literal["PASSWORD"]
    auth_endpoint: str
    client_id: str = Field(alias="clientID")
    client_secret: str
    scopes: str | None = None
    username: str
    password: str
    token: str


class ImplicitOauthFlowParams(WireModel):
    grant_type: Literal["IMPLICIT"]
    auth_endpoint: str
    client_id: str = Field(alias="clientID")
    scopes: str | None = None
    token: str


GrantTypeInfoV3 = Annotated[
    AuthCodeGrantTypeParamsV3
    | ClientCredentialsGrantTypeParams
    | PasswordGrantTypeParams
    | ImplicitOauthFlowParams,
    Field(discriminator="grant_type"),
]


class RestAuthOAuth2V3(WireModel):
    auth_type: Literal["oauth-2"]
    auth_active: bool
    grant_type_info: GrantTypeInfoV3
    add_to: Literal["HEADERS", "QUERY_PARAMS"] = "HEADERS"


RestAuthV3 = Annotated[
    RestAuthNone
    | RestAuthInherit
    | RestAuthBasic
    | RestAuthBearer
    | RestAuthOAuth2V3
    | RestAuthAPIKeyV1,
    Field(discriminator="auth_type"),
]


class RestRequestV3(RestRequestV2):
    v: Literal["3"]  # type: ignore[assignment]
    auth: RestAuthV3  # type: ignore[assignment]


def _upgrade_oauth(auth: RestAuthOAuth2V1) -> dict[str, Any]:
    return {
        "authType": "oauth-2",
        "authActive": auth.auth_active,
        "grantTypeInfo": {
            "grantType": "AUTHORIZATION_CODE",
            "authEndpoint": auth.auth_url,
            "tokenEndpoint": auth.access_token_url,
            "clientID": auth.client_id,
            "clientSecret": "",
            "scopes": auth.scope,
            "isPKCE": False,
            "token": auth.token,
        },
        "addTo": "HEADERS",
    }


def upgrade(old: RestRequestV2) -> RestRequestV3:
    auth = old.auth
    if isinstance(auth, RestAuthOAuth2V1):
        return retag(old, RestRequestV3, 3, auth=_upgrade_oauth(auth))
    return retag(old, RestRequestV3, 3)


VERSION = VersionModule(version=3, schema=RestRequestV3, upgrade=upgrade)

__all__ = [
    "AuthCodeGrantTypeParamsV3",
    "ClientCredentialsGrantTypeParams",
    "GrantTypeInfoV3",
    "ImplicitOauthFlowParams",
    "PasswordGrantTypeParams",
    "RestAuthOAuth2V3",
    "RestAuthV3",
    "RestRequestV3",
    "VERSION",
    "upgrade",
]
