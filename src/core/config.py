"""Configuration management for daystreak."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    data_file: Path = Field(
        default=Path("data/daystreak.json"),
        description="Path of the JSON key-value file holding the tracker snapshot",
    )

    # Challenge Defaults
    default_total_days: int = Field(
        default=100,
        description="Challenge length used when no valid length has been stored",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Challenge Bounds
    MIN_TOTAL_DAYS: int = 10
    MAX_TOTAL_DAYS: int = 365
    FIRST_DAY: int = 1

    # Storage Keys
    KEY_TASKS: str = "tasks"
    KEY_DAY: str = "day"
    KEY_TOTAL_DAYS: str = "totalDays"
    KEY_START_DATE: str = "startDate"
    KEY_DATE_LABEL_SETTING: str = "dateLabelSetting"
    KEY_DARK_MODE: str = "darkMode"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
