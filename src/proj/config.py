"""Configuration for the proj CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The database location defaults to a fixed path so that every invocation, from
any working directory, sees the same set of projects.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path("/tmp/projects.db")


class ProjSettings(BaseSettings):
    """Settings for the proj CLI.

    Environment variables:
    - PROJ_DB_PATH  (optional)
    - PROJ_SHELL    (optional)
    - LOG_LEVEL     (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ProjSettings(_env_file=path_to_env)`.
    """

    db_path: Path = Field(
        default=DEFAULT_DB_PATH,
        validation_alias="PROJ_DB_PATH",
        description="SQLite database holding project records",
    )

    shell: str = Field(
        default="sh",
        validation_alias="PROJ_SHELL",
        description="Shell used to run start/teardown commands (invoked as `<shell> -c`)",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @field_validator("shell")
    @classmethod
    def _non_empty_shell(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("PROJ_SHELL must not be empty")
        return value.strip()
