"""
Configuration management using Pydantic Settings.
Challenge: Centralized config, env validation, type safety.
Design: Settings are read once and passed explicitly into the stores at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Catalog API"
    debug: bool = False
    log_level: str = "INFO"

    # Database (SQLite by default; any async SQLAlchemy URL works, e.g. postgresql+asyncpg://...)
    database_url: str = "sqlite+aiosqlite:///./catalog.sqlite3"

    # Image artifacts
    images_dir: Path = Path("images")
    image_extension: str = ".jpg"
    # Served by GET /images/{name} when the requested image does not exist
    default_image: str | None = "default.jpg"

    # Deadline for a single add-item operation; None disables it
    operation_timeout_seconds: float | None = 30.0


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every request."""
    return Settings()
