# SPDX-License-Identifier: MIT
"""Runtime settings for the record tools.

:class:`Settings` layers ``RV_`` environment variables (and a ``.env`` file in
the working directory) over the values read from ``config/app.yaml``. The
environment always wins so a single run can be adjusted without editing the
file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from request_versions.constants import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE
from request_versions.core.versioning import summarise_validation_error
from request_versions.io_utils.loader import load_app_config
from request_versions.models import AppConfig
from request_versions.observability.monitoring import LogLevel

# Common spellings from the logging module and their console equivalents.
_LEVEL_ALIASES = {"warning": "warn", "critical": "fatal"}


class Settings(BaseSettings):
    """Effective configuration for one CLI run."""

    log_level: LogLevel = Field(
        "info", description="Console log level before -v/-q adjustments."
    )
    quarantine_dir: Path = Field(
        Path("quarantine"),
        description="Directory receiving records that failed to migrate.",
    )
    strict: bool = Field(
        False, description="Exit with a failure status when records are quarantined."
    )
    legacy_fallback: bool = Field(
        False,
        description="Salvage unparseable records with the legacy field extractor.",
    )
    logfire_token: str | None = Field(
        None, description="Token used to export telemetry to Logfire.", repr=False
    )

    model_config = SettingsConfigDict(env_prefix="RV_", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            level = value.strip().lower()
            return _LEVEL_ALIASES.get(level, level)
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init kwargs carry the YAML values, so they rank below the environment.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def _file_config(config_path: Path | str | None) -> AppConfig:
    if config_path:
        path = Path(config_path)
        return load_app_config(path.parent, path.name)
    if (DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE).is_file():
        return load_app_config()
    return AppConfig()


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Return validated settings for this run.

    Args:
        config_path: YAML file to read instead of ``config/app.yaml``. When
            omitted and the default file is absent, built-in defaults apply.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        RuntimeError: If the merged values are invalid.
    """
    file_values = _file_config(config_path).model_dump()
    dotenv = Path(".env")
    try:
        return Settings(
            **file_values,
            _env_file=dotenv if dotenv.is_file() else None,
        )
    except ValidationError as exc:
        raise RuntimeError(
            f"Invalid configuration: {summarise_validation_error(exc)}"
        ) from exc


__all__ = ["Settings", "load_settings"]
