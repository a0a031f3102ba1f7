"""Library configuration using Pydantic Settings.

Configuration is environment-aware:
- WEBERR_ENV determines which .env file to load from the working directory
- Supports: development, testing, staging, production
- Variables already present in the environment always win over the file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
WEBERR_ENV = os.getenv("WEBERR_ENV", "development")

# Map environments to their respective .env files (relative to the cwd)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(WEBERR_ENV, ".env.development")
_env_path = Path.cwd() / _env_filename

# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_path.is_file():
    from dotenv import load_dotenv
    load_dotenv(_env_path, override=False)


def _build_stack_settings() -> "StackSettings":
    """Build stack capture settings from environment."""

    return StackSettings()


def _build_log_settings() -> "LogSettings":
    """Build logging settings from environment."""

    return LogSettings()


class StackSettings(BaseSettings):
    """Stack trace capture configuration.

    Capture happens on every error construction, so deployments that never
    read traces can switch it off entirely.
    """

    enabled: bool = Field(
        True,
        description="Capture a stack trace when an annotated error is created",
    )
    max_frames: int = Field(
        64,
        description="Maximum number of frames kept per captured trace",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="WEBERR_STACK_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration used by configure_logging()."""

    level: str = Field(
        "WARNING",
        description="Log level name for the configured handler",
    )
    format: str = Field(
        "json",
        description="Output format: json or plain",
    )

    model_config = SettingsConfigDict(
        env_prefix="WEBERR_LOG_",
        case_sensitive=False,
    )

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"json", "plain"}:
            raise ValueError(f"unsupported log format: {value!r}")
        return value


class Settings(BaseSettings):
    """Main settings container.

    Nested settings are created via default_factory so each section reads
    its own prefixed environment variables.
    """

    env: str = WEBERR_ENV
    stack: StackSettings = Field(default_factory=_build_stack_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        env_prefix="WEBERR_",
        case_sensitive=False,
    )


# Global settings instance - read at call time so tests can patch it
settings = Settings()
