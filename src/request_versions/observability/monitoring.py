# SPDX-License-Identifier: MIT
"""Helpers for enabling Pydantic Logfire telemetry."""

from __future__ import annotations

import os
from typing import Literal

import logfire

LogLevel = Literal["fatal", "error", "warn", "notice", "info", "debug", "trace"]


def _mask_token(value: str | None) -> str | None:
    """Return a masked representation of ``value`` for safe logging."""
    if not value:
        return None
    return f"{value[:4]}..."


def init_logfire(token: str | None = None, min_log_level: LogLevel = "warn") -> None:
    """Configure Logfire for a CLI run.

    Args:
        token: Optional Logfire API token. If omitted, ``RV_LOGFIRE_TOKEN`` from
            the environment is used. Without a token nothing leaves the
            machine.
        min_log_level: Minimum level for console output.
    """
    key = token or os.getenv("RV_LOGFIRE_TOKEN")
    logfire.configure(
        token=key,
        send_to_logfire="if-token-present",
        service_name="request-versions",
        console=logfire.ConsoleOptions(
            min_log_level=min_log_level,
            show_project_link=False,
        ),
    )
    logfire.debug("Configured logfire", token=_mask_token(key))


__all__ = ["LogLevel", "init_logfire"]
