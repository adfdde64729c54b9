"""CLI settings — flags and ``ENVBIND_*`` environment variables in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ENVBIND_*`` prefix
  3. Code defaults

Uses Pydantic Settings v2. The settings object only configures the CLI
itself; user dataclasses are populated by :func:`envbind.read_struct`.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from envbind.domain.levels import LogLevel


class EnvbindSettings(BaseSettings):
    """Unified, frozen settings for the envbind CLI.

    Attributes:
        json_output: Emit results as JSON instead of text.
        verbose: Debug logging for the ``envbind`` logger.
        log_json: Structured JSON log lines on stderr.
        log_level: Level used when not verbose (``debug``/``info``/``warn``/``error``).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ENVBIND_",
    }

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False
    log_level: LogLevel = LogLevel.WARN

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LogLevel.parse(value)
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
        """Only CLI flags and environment variables; no dotenv or secrets dir."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> EnvbindSettings:
        """Construct settings from a CLI invocation.

        Flags left at their Click default (``False``/``None``) do not mask
        the corresponding ``ENVBIND_*`` variable.
        """
        overrides = {key: value for key, value in cli_flags.items() if value}
        return cls(**overrides)
