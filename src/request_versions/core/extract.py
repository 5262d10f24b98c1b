# SPDX-License-Identifier: MIT
"""Best-effort field salvage for values the migration chain rejects.

Unlike :meth:`VersionedEntity.safe_parse`, which fails when any part of a
record is invalid, the extractor starts from a default record and copies over
each recognised field that validates on its own. Everything else keeps its
default value. Prefer the migration chain; this path exists for stored data
that predates reliable version tags.
"""

from __future__ import annotations

import warnings
from typing import Any, Mapping

import logfire
from pydantic import TypeAdapter, ValidationError

from request_versions.versions.v0 import RestKeyValue
from request_versions.versions.v5 import RestAuth
from request_versions.versions.v6 import RestReqBody
from request_versions.versions.v7 import RestRequestV7

_KEY_VALUE_ROWS = TypeAdapter(list[RestKeyValue])

# Wire name to model attribute name.
_STRING_FIELDS = {
    "id": "id",
    "name": "name",
    "method": "method",
    "endpoint": "endpoint",
    "preRequestScript": "pre_request_script",
    "testScript": "test_script",
}

_VALIDATED_FIELDS: dict[str, tuple[str, TypeAdapter[Any]]] = {
    "body": ("body", TypeAdapter(RestReqBody)),
    "auth": ("auth", TypeAdapter(RestAuth)),
    "params": ("params", _KEY_VALUE_ROWS),
    "headers": ("headers", _KEY_VALUE_ROWS),
    "requestVariables": ("request_variables", _KEY_VALUE_ROWS),
}


def extract_fields(x: Any) -> dict[str, Any]:
    """Return the individually valid request fields found in ``x``.

    Keys are model attribute names. Fields that are missing or fail their own
    validation are omitted.
    """
    if not isinstance(x, Mapping):
        return {}

    found: dict[str, Any] = {}
    for key, attribute in _STRING_FIELDS.items():
        value = x.get(key)
        if isinstance(value, str):
            found[attribute] = value
        elif key in x:
            logfire.debug("Discarding non-string field", field=key)

    for key, (attribute, adapter) in _VALIDATED_FIELDS.items():
        if key not in x:
            continue
        try:
            found[attribute] = adapter.validate_python(x[key])
        except ValidationError as exc:
            logfire.debug(
                "Discarding invalid field", field=key, errors=exc.error_count()
            )
    return found


def safely_extract_rest_request(x: Any, default: RestRequestV7) -> RestRequestV7:
    """Return ``default`` overlaid with whatever fields of ``x`` validate.

    Args:
        x: Value of unknown structure.
        default: Record supplying every field ``x`` does not provide.

    Returns:
        A new record; ``default`` is left untouched. Never raises.

    .. deprecated::
        Only kept for legacy data. Use ``rest_requests.safe_parse``, which
        rejects invalid records instead of silently dropping fields.
    """
    warnings.warn(
        "safely_extract_rest_request is deprecated; use rest_requests.safe_parse",
        DeprecationWarning,
        stacklevel=2,
    )
    return default.model_copy(update=extract_fields(x), deep=True)


__all__ = ["extract_fields", "safely_extract_rest_request"]
