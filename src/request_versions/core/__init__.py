# SPDX-License-Identifier: MIT
"""Versioned entity engine.

Exports:
    VersionedEntity: Detect, validate and migrate records to the latest shape.
    VersionModule: Validator and upgrader for a single schema version.
    ParseOk, ParseFailure, ErrorKind: Results returned by ``safe_parse``.
    struct_eq, deep_eq, optional_eq, map_then_eq: Equality combinators.

The legacy extractor lives in :mod:`request_versions.core.extract` and is not
re-exported because it depends on the concrete request versions.
"""

from .equality import deep_eq, map_then_eq, optional_eq, str_eq, struct_eq
from .versioning import (
    ErrorKind,
    ParseFailure,
    ParseOk,
    RegistryError,
    SchemaMismatchError,
    UndetectedVersionError,
    UnknownVersionError,
    UpgradeInvariantViolation,
    VersionedEntity,
    VersioningError,
    VersionModule,
)

__all__ = [
    "ErrorKind",
    "ParseFailure",
    "ParseOk",
    "RegistryError",
    "SchemaMismatchError",
    "UndetectedVersionError",
    "UnknownVersionError",
    "UpgradeInvariantViolation",
    "VersionModule",
    "VersionedEntity",
    "VersioningError",
    "deep_eq",
    "map_then_eq",
    "optional_eq",
    "str_eq",
    "struct_eq",
]
