"""
Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
Storage locations, the location provider and the HTTP surface are all
configurable without code changes.
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    url: str = "sqlite:///./data/locations.db"

    model_config = SettingsConfigDict(env_prefix="DATABASE_")


class PreferenceSettings(BaseSettings):
    """Key-value preference storage settings."""

    file: str = "data/preferences.json"
    dark_mode_key: str = "darkMode"
    lock_timeout: float = 5.0

    model_config = SettingsConfigDict(env_prefix="PREFS_")


class LocationSettings(BaseSettings):
    """Location provider configuration."""

    provider: Literal["device", "fixed"] = "device"
    fixed_latitude: float = 0.0
    fixed_longitude: float = 0.0
    fixed_permission: Literal["granted", "denied"] = "granted"
    min_time_ms: int = 1000
    min_distance_m: float = 0.0

    model_config = SettingsConfigDict(env_prefix="LOCATION_")

    @field_validator("provider", "fixed_permission", mode="before")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class APISettings(BaseSettings):
    """HTTP screen surface settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    model_config = SettingsConfigDict(env_prefix="API_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    file: str = "logs/location_base.log"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings — aggregates all sub-settings."""

    database: DatabaseSettings = DatabaseSettings()
    preferences: PreferenceSettings = PreferenceSettings()
    location: LocationSettings = LocationSettings()
    api: APISettings = APISettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def setup(self) -> None:
        """Create the directories that storage and logs live in."""
        Path(self.preferences.file).parent.mkdir(parents=True, exist_ok=True)
        Path(self.logging.file).parent.mkdir(parents=True, exist_ok=True)
        db_path = sqlite_path(self.database.url)
        if db_path is not None:
            db_path.parent.mkdir(parents=True, exist_ok=True)


def sqlite_path(url: str) -> Path | None:
    """Return the file path of a SQLite URL, or None for memory/other engines."""
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        return None
    raw = url[len(prefix):]
    if not raw or raw == ":memory:":
        return None
    return Path(raw)


# Global settings instance — import this in other modules
settings = Settings()
