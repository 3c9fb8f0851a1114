"""
Configuration management for the batch translator.

Settings are loaded from environment variables (``BT_`` prefix) and an
optional ``.env`` file using Pydantic BaseSettings.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("BT_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the BT_ prefix, e.g.
    ``BT_METRICS_BASE_NAME`` overrides ``metrics_base_name``. ``LOG_LEVEL``
    is read without prefix.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")
    log_file_dir: str = Field(default="logs", description="Directory for log files")

    metrics_base_name: str = Field(
        default="translation",
        description="Default prefix for element error counters",
    )
    isolate_element_errors: bool = Field(
        default=True,
        description="Default error policy: drop failing elements instead of aborting",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="BT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
