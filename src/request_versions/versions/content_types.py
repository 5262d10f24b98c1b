# SPDX-License-Identifier: MIT
"""Request body content types understood by the request schemas."""

from __future__ import annotations

from typing import Literal, get_args

# Content types whose body is a single text payload.
TextContentType = Literal[
    "application/json",
    "application/ld+json",
    "application/hal+json",
    "application/vnd.api+json",
    "application/xml",
    "text/xml",
    "application/x-www-form-urlencoded",
    "text/html",
    "text/plain",
]

FORM_DATA = "multipart/form-data"
BINARY = "application/octet-stream"

KNOWN_CONTENT_TYPES: dict[str, str] = {
    "application/json": "json",
    "application/ld+json": "json",
    "application/hal+json": "json",
    "application/vnd.api+json": "json",
    "application/xml": "xml",
    "text/xml": "xml",
    "application/x-www-form-urlencoded": "multipart",
    FORM_DATA: "multipart",
    BINARY: "binary",
    "text/html": "html",
    "text/plain": "plain",
}

TEXT_CONTENT_TYPES: frozenset[str] = frozenset(get_args(TextContentType))


def content_type_segment(content_type: str | None) -> str | None:
    """Return the editor segment for ``content_type`` or ``None`` if unknown."""
    if content_type is None:
        return None
    return KNOWN_CONTENT_TYPES.get(content_type)


def is_json_content_type(content_type: str | None) -> bool:
    """Return ``True`` for JSON flavoured content types."""
    return content_type_segment(content_type) == "json"


__all__ = [
    "BINARY",
    "FORM_DATA",
    "KNOWN_CONTENT_TYPES",
    "TEXT_CONTENT_TYPES",
    "TextContentType",
    "content_type_segment",
    "is_json_content_type",
]
