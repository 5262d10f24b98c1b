"""Project-wide constants and default paths.

This module centralises small constants that are imported across the
application. Keep this file minimal and free of side effects.
"""

from __future__ import annotations

from pathlib import Path

# Field carrying the stringified schema version on every record from v1 on.
VERSION_TAG_FIELD = "v"

DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_CONFIG_FILE = Path("app.yaml")
DEFAULT_ENDPOINT = "https://echo.hoppscotch.io"

__all__ = [
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_ENDPOINT",
    "VERSION_TAG_FIELD",
]
