# SPDX-License-Identifier: MIT
"""Structural equality combinators for current records.

Comparators are plain callables ``(a, b) -> bool``. They are composed per field
with :func:`struct_eq`, keeping normalisation policy (such as ignoring blank
placeholder rows) in one explicit mapping instead of a generic deep compare.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from pydantic_core import to_jsonable_python

Eq = Callable[[Any, Any], bool]


def str_eq(a: Any, b: Any) -> bool:
    """Exact text equality."""
    return a == b


def deep_eq(a: Any, b: Any) -> bool:
    """Structural equality over the JSON-compatible form of ``a`` and ``b``."""
    return to_jsonable_python(a, by_alias=True) == to_jsonable_python(b, by_alias=True)


def optional_eq(eq: Eq) -> Eq:
    """Lift ``eq`` so two absent values are equal and one absent value is not."""

    def _eq(a: Any, b: Any) -> bool:
        if a is None or b is None:
            return a is None and b is None
        return eq(a, b)

    return _eq


def map_then_eq(fn: Callable[[Any], Any], eq: Eq) -> Eq:
    """Apply ``fn`` to both sides before comparing them with ``eq``."""

    def _eq(a: Any, b: Any) -> bool:
        return eq(fn(a), fn(b))

    return _eq


def _field(value: Any, name: str, alias: str | None = None) -> Any:
    if isinstance(value, Mapping):
        if name in value or alias is None:
            return value.get(name)
        return value.get(alias)
    return getattr(value, name, None)


def struct_eq(
    fields: Mapping[str, Eq], aliases: Mapping[str, str] | None = None
) -> Eq:
    """Return a comparator that is the conjunction of per-field comparators.

    Mapping inputs missing a field name are read through ``aliases``, so
    wire-form dicts compare like the models they validate into.
    """
    wire = aliases or {}

    def _eq(a: Any, b: Any) -> bool:
        return all(
            eq(_field(a, name, wire.get(name)), _field(b, name, wire.get(name)))
            for name, eq in fields.items()
        )

    return _eq


def drop_blank_entries(entries: Iterable[Any]) -> list[Any]:
    """Return ``entries`` without rows whose key and value are both empty."""
    return [
        entry
        for entry in entries
        if not (_field(entry, "key") == "" and _field(entry, "value") == "")
    ]


blank_tolerant_list_eq = map_then_eq(drop_blank_entries, deep_eq)

# Keyed by model attribute name; wire names differ only where listed in
# REST_REQUEST_WIRE_NAMES.
REST_REQUEST_FIELD_EQ: dict[str, Eq] = {
    "id": optional_eq(str_eq),
    "v": str_eq,
    "auth": deep_eq,
    "body": deep_eq,
    "endpoint": str_eq,
    "headers": optional_eq(blank_tolerant_list_eq),
    "params": optional_eq(blank_tolerant_list_eq),
    "method": str_eq,
    "name": str_eq,
    "pre_request_script": str_eq,
    "test_script": str_eq,
    "request_variables": optional_eq(blank_tolerant_list_eq),
    "ref_id": str_eq,
}

REST_REQUEST_WIRE_NAMES: dict[str, str] = {
    "pre_request_script": "preRequestScript",
    "test_script": "testScript",
    "request_variables": "requestVariables",
    "ref_id": "_ref_id",
}


def rest_request_eq(ignore: Iterable[str] = ()) -> Eq:
    """Return the request comparator, optionally skipping fields in ``ignore``."""
    skipped = set(ignore)
    return struct_eq(
        {name: eq for name, eq in REST_REQUEST_FIELD_EQ.items() if name not in skipped},
        REST_REQUEST_WIRE_NAMES,
    )


is_equal_rest_request = rest_request_eq()

__all__ = [
    "Eq",
    "REST_REQUEST_FIELD_EQ",
    "REST_REQUEST_WIRE_NAMES",
    "blank_tolerant_list_eq",
    "deep_eq",
    "drop_blank_entries",
    "is_equal_rest_request",
    "map_then_eq",
    "optional_eq",
    "rest_request_eq",
    "str_eq",
    "struct_eq",
]
