"""Environment-based settings using pydantic-settings.

Usage:
    from ffmeta.env_settings import get_env_settings

    env = get_env_settings()
    print(env.parser.carry_stream_info)  # From FFMETA_CARRY_STREAM_INFO env var

Environment Variables:
    Parser:
        FFMETA_CARRY_STREAM_INFO - Keep duration/format/codec/channels across
            parse() calls on one parser instance (default: false)

    Application:
        LOG_LEVEL - Logging level (default: "INFO")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ParserEnvSettings(BaseSettings):
    """Parser behaviour from environment variables.

    Reads from FFMETA_* env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="FFMETA_",
        extra="ignore",
    )

    carry_stream_info: bool = Field(
        default=False,
        description="Keep stream info from earlier parse() calls on the same parser",
    )


class AppEnvSettings(BaseSettings):
    """Application-level settings from environment variables.

    Reads from LOG_LEVEL env var.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got: {v}")
        return upper


class EnvSettings(BaseSettings):
    """Combined environment settings.

    Use get_env_settings() to get a cached instance.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    parser: ParserEnvSettings = Field(default_factory=ParserEnvSettings)
    app: AppEnvSettings = Field(default_factory=AppEnvSettings)


@lru_cache(maxsize=1)
def get_env_settings() -> EnvSettings:
    """Get cached environment settings.

    The cache is populated on first call.
    """
    return EnvSettings()


def clear_env_settings_cache() -> None:
    """Clear the cached environment settings.

    Useful for testing to ensure fresh settings are loaded.
    """
    get_env_settings.cache_clear()


def load_env_settings_from_file(env_file: Path) -> EnvSettings:
    """Load environment settings from a specific .env file.

    Args:
        env_file: Path to .env file to load.

    Returns:
        EnvSettings instance with configuration from the file.
    """
    from dotenv import load_dotenv

    load_dotenv(env_file, override=True)
    logger.debug("Loaded environment from %s", env_file)

    clear_env_settings_cache()
    return get_env_settings()
