"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "taskdesk.db"
    screenshot_dir_name: str = "screenshots"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def screenshot_dir(self) -> Path:
        return self.data_dir / self.screenshot_dir_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 3001
    debug: bool = False
    cors_origins: list[str] = ["*"]


class ReminderSettings(BaseSettings):
    """Reminder polling configuration."""

    model_config = SettingsConfigDict(env_prefix="REMINDER_")

    poll_default_take: int = 10
    poll_max_take: int = 50


class LinkSettings(BaseSettings):
    """Link preview and screenshot configuration."""

    model_config = SettingsConfigDict(env_prefix="LINK_")

    fetch_timeout: float = 10.0
    user_agent: str = "TaskDesk/1.0 (+link-preview)"
    max_title_length: int = 300
    max_description_length: int = 1000

    # Screenshot capture (requires the optional playwright extra)
    screenshots_enabled: bool = False
    screenshot_timeout_ms: int = 15000
    screenshot_settle_ms: int = 1000
    screenshot_total_timeout: float = 30.0
    viewport_width: int = 1280
    viewport_height: int = 720


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "TaskDesk"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    reminders: ReminderSettings = Field(default_factory=ReminderSettings)
    links: LinkSettings = Field(default_factory=LinkSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
