# SPDX-License-Identifier: MIT
"""Public surface for saved REST request records.

``rest_requests`` is the versioned entity: feed it any stored request and it
returns a version 7 :class:`RestRequest` or reports why it could not.

Version detection is two-tier. Records from version 1 on carry their version
as a decimal string under ``v``; untagged records are accepted only when they
validate as version 0. If the tag field ever changes name or type,
:func:`detect_request_version` must change with it.
"""

from __future__ import annotations

import re
import warnings
from typing import Any, Mapping
from uuid import uuid4

from pydantic import BaseModel

from request_versions.constants import DEFAULT_ENDPOINT, VERSION_TAG_FIELD
from request_versions.core.equality import is_equal_rest_request
from request_versions.core.extract import safely_extract_rest_request
from request_versions.core.versioning import VersionedEntity
from request_versions.versions import LATEST_VERSION, VERSION_MODULES
from request_versions.versions.v0 import VERSION as V0_VERSION
from request_versions.versions.v7 import RestRequestV7

RestRequest = RestRequestV7

REST_REQ_SCHEMA_VERSION = str(LATEST_VERSION)

_VERSION_TAG = re.compile(r"[0-9]+")


def detect_request_version(raw: Any) -> int | None:
    """Return the schema version ``raw`` belongs to, or ``None``.

    The tag is trusted without validating the rest of the record; the
    migration chain validates it afterwards.
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    if isinstance(raw, Mapping):
        tag = raw.get(VERSION_TAG_FIELD)
        if isinstance(tag, str) and _VERSION_TAG.fullmatch(tag):
            return int(tag)
    return 0 if V0_VERSION.matches(raw) else None


rest_requests: VersionedEntity[RestRequest] = VersionedEntity(
    latest_version=LATEST_VERSION,
    version_map=VERSION_MODULES,
    get_version=detect_request_version,
)


def new_ref_id() -> str:
    """Return a fresh reference identifier."""
    return str(uuid4())


def make_rest_request(**fields: Any) -> RestRequest:
    """Return a current record built from wire-named ``fields``.

    The version tag is filled in; everything else must be supplied.

    Raises:
        pydantic.ValidationError: If ``fields`` do not form a valid record.
    """
    return RestRequest.model_validate({"v": REST_REQ_SCHEMA_VERSION, **fields})


def get_default_rest_request() -> RestRequest:
    """Return a fresh placeholder request with a new reference identifier."""
    return make_rest_request(
        _ref_id=new_ref_id(),
        endpoint=DEFAULT_ENDPOINT,
        name="Untitled",
        params=[],
        headers=[],
        method="GET",
        auth={"authType": "inherit", "authActive": True},
        preRequestScript="",
        testScript="",
        body={"contentType": None, "body": None},
        requestVariables=[],
    )


def ensure_ref_id(record: RestRequest) -> RestRequest:
    """Return ``record`` with a reference identifier, assigning one if missing.

    Records that already carry an identifier are returned unchanged so the
    identifier stays stable across later migrations and edits.
    """
    if record.ref_id is not None:
        return record
    return record.model_copy(update={"ref_id": new_ref_id()})


def is_rest_request(x: Any) -> bool:
    """Return ``True`` when ``x`` is already a current request record.

    .. deprecated::
        Use ``rest_requests.is_latest`` or ``rest_requests.is_valid``.
    """
    warnings.warn(
        "is_rest_request is deprecated; use rest_requests.is_latest",
        DeprecationWarning,
        stacklevel=2,
    )
    return rest_requests.is_latest(x)


def translate_to_new_request(x: Any) -> RestRequest:
    """Return ``x`` as a current record, or a default record if it cannot parse.

    .. deprecated::
        Use ``rest_requests.safe_parse`` and handle the failure explicitly.
    """
    warnings.warn(
        "translate_to_new_request is deprecated; use rest_requests.safe_parse",
        DeprecationWarning,
        stacklevel=2,
    )
    result = rest_requests.safe_parse(x)
    return result.value if result.ok else get_default_rest_request()


__all__ = [
    "REST_REQ_SCHEMA_VERSION",
    "RestRequest",
    "detect_request_version",
    "ensure_ref_id",
    "get_default_rest_request",
    "is_equal_rest_request",
    "is_rest_request",
    "make_rest_request",
    "new_ref_id",
    "rest_requests",
    "safely_extract_rest_request",
    "translate_to_new_request",
]
