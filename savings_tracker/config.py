"""
Savings Tracker - Configuration Module.

This module loads runtime settings from SAVINGS_TRACKER_* environment
variables or a .env file in the working directory. Command-line options
override these values.

Settings:
    - data_file: JSON file holding the goal and balance
    - segment_count: Cells in the progress bar (at least 1)
    - strict: Report rejected amounts instead of ignoring them
    - log_level: Standard logging level name

Classes:
    Settings: Validated application settings.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from savings_tracker.schema import DEFAULT_SEGMENT_COUNT

DEFAULT_DATA_FILE = Path.home() / ".savings_tracker" / "savings.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings loaded from SAVINGS_TRACKER_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="SAVINGS_TRACKER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    data_file: Path = DEFAULT_DATA_FILE

    # Display
    segment_count: int = Field(default=DEFAULT_SEGMENT_COUNT, ge=1)

    # Report rejected operations instead of ignoring them
    strict: bool = False

    # Logging
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
