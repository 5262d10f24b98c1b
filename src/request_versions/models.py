# SPDX-License-Identifier: MIT
"""Shared Pydantic base classes and application configuration models.

Request shapes for each schema version live in :mod:`request_versions.versions`
and derive from :class:`WireModel`, which maps snake_case attribute names onto
the camelCase keys used by stored records.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for persisted request shapes.

    Unknown keys are ignored rather than rejected so older clients that wrote
    extra bookkeeping fields still validate.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class StrictModel(BaseModel):
    """Base model with strict settings to prevent shape drift."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Return ``model`` as a JSON-compatible mapping using wire field names.

    Only fields that were explicitly provided are emitted, so a record read
    from storage serialises back to the same keys it arrived with.
    """

    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)


class AppConfig(StrictModel):
    """Top-level configuration for the command-line tools."""

    log_level: Annotated[
        str, Field(min_length=1, description="Logging verbosity level.")
    ] = "INFO"
    quarantine_dir: Path = Field(
        Path("quarantine"),
        description="Directory receiving records that failed to migrate.",
    )
    strict: bool = Field(
        False, description="Exit with a failure status when records are quarantined."
    )
    legacy_fallback: bool = Field(
        False,
        description=(
            "Salvage unparseable records with the legacy field extractor instead"
            " of quarantining them."
        ),
    )


__all__ = ["AppConfig", "StrictModel", "WireModel", "to_wire"]
