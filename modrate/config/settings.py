"""
Application Settings

Centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.

Configuration Categories:
=========================
- Application: Basic app info (name, environment, log level)
- Database: Connection URL and pool settings
- Catalog Refresh: Refresh mode, import interval, cache file, remote URL
- Import: Batch sizing for bulk statements

Environment Variables:
======================
Settings are loaded from environment variables or .env file.
Environment variables take precedence over .env file values.

Legacy names are accepted as-is and collapsed into canonical values by
modrate.config.refresh.load_refresh_options():
    MOD_REFRESH=download-if-expired   → expiration
    MOD_EXPIRATION_TIME_HOURS=24      → MOD_IMPORT_INTERVAL_HOURS

Usage:
======
    from modrate.config.settings import settings

    chunk_size = settings.SQL_CHUNK_SIZE
    is_dev = settings.is_development
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════════════════════

    APP_NAME: str = "ModRate"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════════════════════════
    # DATABASE
    # ═══════════════════════════════════════════════════════════════════════════════

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///data/db.db",
        description="SQLAlchemy async URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Number of persistent connections in the pool (ignored for SQLite)",
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Extra connections allowed when pool is exhausted (ignored for SQLite)",
    )
    DATABASE_ECHO: bool = False

    # ═══════════════════════════════════════════════════════════════════════════════
    # CATALOG REFRESH
    # ═══════════════════════════════════════════════════════════════════════════════

    MOD_REFRESH: str = Field(
        default="expiration",
        description="none | cache-only | expiration | always-download | download-if-expired",
    )
    MOD_IMPORT_INTERVAL_HOURS: Optional[int] = Field(
        default=None,
        description="Hours after which the cached catalog is considered expired",
    )
    MOD_EXPIRATION_TIME_HOURS: Optional[int] = Field(
        default=None,
        description="Legacy name of MOD_IMPORT_INTERVAL_HOURS",
    )
    MOD_CACHE_FILE: str = Field(
        default="data/mods_cache.json",
        description="File holding the last fetched raw catalog snapshot",
    )
    MOD_CATALOG_URL: str = Field(
        default="https://thunderstore.io/c/lethal-company/api/v1/package/",
        description="Remote endpoint returning the full package listing",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # IMPORT
    # ═══════════════════════════════════════════════════════════════════════════════

    SQL_CHUNK_SIZE: int = Field(
        default=150,
        gt=0,
        description="Maximum number of rows written by one batched statement",
    )
    SQL_MAX_PARAMETERS: int = Field(
        default=32766,
        gt=0,
        description="Maximum bound parameters the store accepts in one statement",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # PROPERTIES
    # ═══════════════════════════════════════════════════════════════════════════════

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured store is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Global settings instance for convenient import
settings = get_settings()
