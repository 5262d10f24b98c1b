# SPDX-License-Identifier: MIT
"""Loading the YAML configuration consumed by the record tools.

Problems are reported through an :class:`ErrorHandler` first and then raised
as a single readable exception for the CLI to show.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import logfire
import yaml
from pydantic import ValidationError

from request_versions.constants import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE
from request_versions.core.versioning import summarise_validation_error
from request_versions.models import AppConfig
from request_versions.utils import ErrorHandler, LoggingErrorHandler


def _read_file(path: Path, error_handler: ErrorHandler | None = None) -> str:
    """Return the UTF-8 text of ``path``.

    Raises:
        FileNotFoundError: If ``path`` is missing.
        RuntimeError: For any other I/O failure.
    """
    reporter = error_handler or LoggingErrorHandler()
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        reporter.handle(f"File not found: {path}", exc, path=str(path))
        raise
    except OSError as exc:
        reporter.handle(f"Could not read {path}", exc, path=str(path))
        raise RuntimeError(f"Could not read {path}: {exc}") from exc
    logfire.debug("Loaded file", path=str(path), chars=len(content))
    return content


def _parse_yaml(path: Path, error_handler: ErrorHandler) -> dict[str, Any]:
    """Return the top-level mapping stored in ``path``; empty files give ``{}``."""
    document = yaml.safe_load(_read_file(path, error_handler))
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"expected a mapping, got {type(document).__name__}")
    return document


def load_app_config(
    base_dir: Path | str = DEFAULT_CONFIG_DIR,
    filename: Path | str = DEFAULT_CONFIG_FILE,
    error_handler: ErrorHandler | None = None,
) -> AppConfig:
    """Return the :class:`AppConfig` stored at ``base_dir / filename``.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        RuntimeError: If it is not valid YAML or fails validation.
    """
    path = Path(base_dir) / Path(filename)
    reporter = error_handler or LoggingErrorHandler()
    with logfire.span("config.load", attributes={"path": str(path)}):
        try:
            return AppConfig.model_validate(_parse_yaml(path, reporter))
        except (ValueError, yaml.YAMLError) as exc:
            # ValidationError is a ValueError subclass.
            reporter.handle(f"Invalid configuration file {path}", exc)
            detail = (
                summarise_validation_error(exc)
                if isinstance(exc, ValidationError)
                else exc
            )
            raise RuntimeError(
                f"Could not load YAML configuration {path}: {detail}"
            ) from exc


__all__ = ["load_app_config"]
