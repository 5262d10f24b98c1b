# SPDX-License-Identifier: MIT
"""Version 1: first tagged request shape.

Introduces the ``v`` tag, a single ``endpoint`` string, a structured body keyed
by content type and an ``auth`` object discriminated by ``authType``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel

from ._base import wire_dump
from .content_types import FORM_DATA, TEXT_CONTENT_TYPES, TextContentType
from .v0 import RestKeyValue, RestRequestV0

RestHeaders = list[RestKeyValue]
RestParams = list[RestKeyValue]


class FormDataText(WireModel):
    """Form-data row holding a text value."""

    key: str
    active: bool
    is_file: Literal[False]
    value: str


class FormDataFile(WireModel):
    """Form-data row referencing uploaded files."""

    key: str
    active: bool
    is_file: Literal[True]
    value: list[Any]


FormDataKeyValue = FormDataText | FormDataFile


class RestReqBodyNone(WireModel):
    content_type: None
    body: None


class RestReqBodyText(WireModel):
    content_type: TextContentType
    body: str


class RestReqBodyFormData(WireModel):
    content_type: Literal["multipart/form-data"]
    body: list[FormDataKeyValue]


RestReqBodyV1 = RestReqBodyText | RestReqBodyFormData | RestReqBodyNone


class RestAuthNone(WireModel):
    auth_type: Literal["none"]
    auth_active: bool


class RestAuthInherit(WireModel):
    auth_type: Literal["inherit"]
    auth_active: bool


class RestAuthBasic(WireModel):
    auth_type: Literal["basic"]
    auth_active: bool
    username: str
    password: str


class RestAuthBearer(WireModel):
    auth_type: Literal["bearer"]
    auth_active: bool
    token: str


class RestAuthOAuth2V1(WireModel):
    """OAuth 2 settings before grant types were modelled separately."""

    auth_type: Literal["oauth-2"]
    auth_active: bool
    token: str
    oidc_discovery_url: str = Field(alias="oidcDiscoveryURL")
    auth_url: str = Field(alias="authURL")
    access_token_url: str = Field(alias="accessTokenURL")
    client_id: str = Field(alias="clientID")
    scope: str


class RestAuthAPIKeyV1(WireModel):
    auth_type: Literal["api-key"]
    auth_active: bool
    key: str
    value: str
    add_to: str


RestAuthV1 = Annotated[
    RestAuthNone
    | RestAuthInherit
    | RestAuthBasic
    | RestAuthBearer
    | RestAuthOAuth2V1
    | RestAuthAPIKeyV1,
    Field(discriminator="auth_type"),
]


class RestRequestV1(WireModel):
    v: Literal["1"]
    id: str | None = None
    name: str
    method: str
    endpoint: str
    headers: RestHeaders
    params: RestParams
    pre_request_script: str
    test_script: str
    auth: RestAuthV1
    body: RestReqBodyV1


def _upgrade_auth(old: RestRequestV0) -> dict[str, Any]:
    if old.auth == "Basic Auth":
        return {
            "authType": "basic",
            "authActive": True,
            "username": old.http_user or "",
            "password": old.http_password or "",
        }
    if old.auth == "Bearer Token":
        return {
            "authType": "bearer",
            "authActive": True,
            "token": old.bearer_token or "",
        }
    return {"authType": "none", "authActive": True}


def _upgrade_body(old: RestRequestV0) -> dict[str, Any]:
    if old.content_type in TEXT_CONTENT_TYPES:
        text = old.raw_params if old.raw_params is not None else old.body
        return {"contentType": old.content_type, "body": text}
    if old.content_type == FORM_DATA:
        # Legacy form rows were never persisted with the request.
        return {"contentType": FORM_DATA, "body": []}
    return {"contentType": None, "body": None}


def upgrade(old: RestRequestV0) -> RestRequestV1:
    """Convert a legacy record into the first tagged shape."""
    data: dict[str, Any] = {
        "v": "1",
        "name": old.name,
        "method": old.method,
        "endpoint": f"{old.url}{old.path}",
        "headers": [wire_dump(row) for row in old.headers],
        "params": [wire_dump(row) for row in old.params],
        "preRequestScript": old.pre_request_script,
        "testScript": old.test_script,
        "auth": _upgrade_auth(old),
        "body": _upgrade_body(old),
    }
    if old.id is not None:
        data["id"] = old.id
    return RestRequestV1.model_validate(data)


VERSION = VersionModule(version=1, schema=RestRequestV1, upgrade=upgrade)

__all__ = [
    "FormDataFile",
    "FormDataKeyValue",
    "FormDataText",
    "RestAuthAPIKeyV1",
    "RestAuthBasic",
    "RestAuthBearer",
    "RestAuthInherit",
    "RestAuthNone",
    "RestAuthOAuth2V1",
    "RestAuthV1",
    "RestHeaders",
    "RestParams",
    "RestReqBodyFormData",
    "RestReqBodyNone",
    "RestReqBodyText",
    "RestReqBodyV1",
    "RestRequestV1",
    "VERSION",
    "upgrade",
]
