# SPDX-License-Identifier: MIT
"""Version 7: adds the ``_ref_id`` reference identifier.

The identifier distinguishes otherwise identical requests, for example
duplicates inside one collection. Upgrading does not mint one; identifiers
are assigned when a record is created or first persisted (see
:func:`request_versions.requests.ensure_ref_id`).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from request_versions.core.versioning import VersionModule

from ._base import retag
from .v6 import RestRequestV6


class RestRequestV7(RestRequestV6):
    v: Literal["7"]  # type: ignore[assignment]
    ref_id: str | None = Field(None, alias="_ref_id")


def upgrade(old: RestRequestV6) -> RestRequestV7:
    return retag(old, RestRequestV7, 7)


VERSION = VersionModule(version=7, schema=RestRequestV7, upgrade=upgrade)

__all__ = ["RestRequestV7", "VERSION", "upgrade"]
