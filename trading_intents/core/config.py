"""Configuration management for trading intents."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IntentSettings(BaseSettings):
    """Runtime settings for services embedding the intent schema.

    Uses Pydantic v2 settings with environment variable support
    (``INTENTS_LOG_LEVEL``, ``INTENTS_LOG_DIR``, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="INTENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level for the console sink")
    log_dir: Path | None = Field(
        default=None, description="Directory for rotating log files (disabled when unset)"
    )
    log_serialize: bool = Field(
        default=False, description="Emit log records as JSON lines instead of text"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the level is one loguru knows about."""
        level = value.upper().strip()
        try:
            logger.level(level)
        except ValueError as exc:
            raise ValueError(f"Unknown log level '{value}'") from exc
        return level


def load_settings() -> IntentSettings:
    """Load settings from environment and .env file."""
    return IntentSettings()
