"""Centralized configuration management using Pydantic Settings.

This module provides typed configuration for the roster clients and
controller, loaded from environment variables with sensible defaults.

Usage:
    from roster.config import get_settings
    settings = get_settings()
    base_url = settings.api.base_url
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Remote event store and user directory configuration."""

    model_config = SettingsConfigDict(env_prefix="ROSTER_API_", extra="ignore")

    base_url: str = Field(default="http://localhost:3000/api", description="Backend base URL")
    events_path: str = Field(default="/events", description="Event collection path")
    users_path: str = Field(default="/users", description="User collection path")
    timeout_sec: float = Field(default=10.0, description="Request timeout in seconds")
    token: str = Field(default="", description="Bearer token sent with every request")

    @field_validator("events_path", "users_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        return v if v.startswith("/") else f"/{v}"


class DebugSettings(BaseSettings):
    """Debug flags configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    http: bool = Field(default=False, alias="http_debug")
    clients: bool = Field(default=False, alias="client_debug")

    @field_validator("*", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)


class LogSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    level: str = Field(default="INFO", alias="log_level")

    @field_validator("level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"


class MessageSettings(BaseSettings):
    """User-visible error messages, overridable for localization."""

    model_config = SettingsConfigDict(env_prefix="ROSTER_MSG_", extra="ignore")

    name_required: str = "Event name is required."
    schedule_required: str = "Select the event schedule."
    address_required: str = "Select the event address."
    schedule_incomplete: str = "Select a date and a time."
    create_failed: str = "Error creating the event."
    update_failed: str = "Error updating the event."
    reload_failed: str = "Error reloading the updated event."
    delete_failed: str = "Error deleting the event."
    no_event_selected: str = "No event selected for editing."


class Settings:
    """Main settings combining all configuration sections.

    This is not a BaseSettings subclass to avoid env var conflicts.
    Each subsetting is loaded independently with its own prefix.

    Usage:
        settings = Settings()
        # or use cached singleton:
        settings = get_settings()
    """

    def __init__(self) -> None:
        self.api = ApiSettings()
        self.debug = DebugSettings()
        self.log = LogSettings()
        self.messages = MessageSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance (singleton pattern)."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing)."""
    get_settings.cache_clear()
