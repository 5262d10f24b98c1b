# SPDX-License-Identifier: MIT
"""Request shapes for every schema version, oldest first.

Adding a version means adding a module here that exposes ``VERSION`` and
appending it to :data:`VERSION_MODULES`.

Exports:
    VERSION_MODULES: Version modules indexed by version number.
    LATEST_VERSION: Highest registered version.
"""

from __future__ import annotations

from . import v0, v1, v2, v3, v4, v5, v6, v7

VERSION_MODULES = {
    module.VERSION.version: module.VERSION
    for module in (v0, v1, v2, v3, v4, v5, v6, v7)
}

LATEST_VERSION = max(VERSION_MODULES)

__all__ = ["LATEST_VERSION", "VERSION_MODULES"]
