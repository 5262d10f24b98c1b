# SPDX-License-Identifier: MIT
"""Helpers shared by the version modules."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def wire_dump(model: BaseModel) -> dict[str, Any]:
    """Return the provided fields of ``model`` keyed by wire name."""
    return model.model_dump(by_alias=True, exclude_unset=True)


def retag(old: BaseModel, target: type[M], version: int, **changes: Any) -> M:
    """Return ``old`` re-validated as ``target`` with the version tag bumped.

    ``changes`` are keyed by wire name and replace the corresponding fields.
    The input model is never modified.
    """
    data = wire_dump(old)
    data.update(changes)
    data["v"] = str(version)
    return target.model_validate(data)


__all__ = ["retag", "wire_dump"]
