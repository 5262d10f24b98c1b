# SPDX-License-Identifier: MIT
"""Version 6: binary bodies and per-row content types for form data."""

from __future__ import annotations

from typing import Any, Literal

from request_versions.core.versioning import VersionModule
from request_versions.models import WireModel

from ._base import retag
from .v1 import RestReqBodyNone, RestReqBodyText
from .v5 import RestRequestV5


class FormDataTextV6(WireModel):
    key: str
    active: bool
    is_file: Literal[False]
    value: str
    content_type: str | None = None


class FormDataFileV6(WireModel):
    key: str
    active: bool
    is_file: Literal[True]
    value: list[Any]
    content_type: str | None = None


FormDataKeyValueV6 = FormDataTextV6 | FormDataFileV6


class RestReqBodyFormDataV6(WireModel):
    content_type: Literal["multipart/form-data"]
    body: list[FormDataKeyValueV6]


class RestReqBodyBinary(WireModel):
    """Raw file upload; ``body`` names the file or is ``None`` when unset."""

    content_type: Literal["application/octet-stream"]
    body: str | None


RestReqBody = RestReqBodyText | RestReqBodyFormDataV6 | RestReqBodyBinary | RestReqBodyNone


class RestRequestV6(RestRequestV5):
    v: Literal["6"]  # type: ignore[assignment]
    body: RestReqBody  # type: ignore[assignment]


def upgrade(old: RestRequestV5) -> RestRequestV6:
    return retag(old, RestRequestV6, 6)


VERSION = VersionModule(version=6, schema=RestRequestV6, upgrade=upgrade)

__all__ = [
    "FormDataFileV6",
    "FormDataKeyValueV6",
    "FormDataTextV6",
    "RestReqBody",
    "RestReqBodyBinary",
    "RestReqBodyFormDataV6",
    "RestRequestV6",
    "VERSION",
    "upgrade",
]
