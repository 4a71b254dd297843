"""
People Profile — Application Configuration

Loads all configuration from environment variables (and an optional .env file)
using Pydantic Settings.  A cached ``get_settings()`` helper is provided so that
FastAPI dependency-injection (and any other call-site) always receives the same
validated instance without re-parsing the environment on every request.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the People Profile service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Database – Cloud SQL via Unix socket, or a plain URL
    # ------------------------------------------------------------------ #
    DATABASE_URL: str
    DB_USER: str = "people_profile"
    DB_PASSWORD: str = ""
    DB_NAME: str = "people_profile"
    CLOUD_SQL_INSTANCE_CONNECTION: str = ""
    CLOUD_SQL_USE_UNIX_SOCKET: bool = True

    # ------------------------------------------------------------------ #
    # Redis – optional directory cache (empty URL disables caching)
    # ------------------------------------------------------------------ #
    REDIS_URL: str = ""
    PROFILE_LIST_CACHE_TTL_SECONDS: int = 60

    # ------------------------------------------------------------------ #
    # Bulk import
    # ------------------------------------------------------------------ #
    IMPORT_MAX_FILE_BYTES: int = 10 * 1024 * 1024
    IMPORT_PROTECTED_EMAILS: str = ""

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT_SECONDS: float = 70.0

    # ------------------------------------------------------------------ #
    # Google Cloud Platform (import archive)
    # ------------------------------------------------------------------ #
    GCP_PROJECT_ID: str = ""
    GCS_BUCKET_NAME: str = ""
    GCS_IMPORT_ARCHIVE_PREFIX: str = "imports/"

    # ------------------------------------------------------------------ #
    # CORS
    # ------------------------------------------------------------------ #
    ALLOWED_ORIGINS: str = "*"

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list split on commas."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def protected_emails(self) -> set[str]:
        """Emails that a reset-mode import must never delete."""
        return {
            e.strip().lower()
            for e in self.IMPORT_PROTECTED_EMAILS.split(",")
            if e.strip()
        }

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("PROFILE_LIST_CACHE_TTL_SECONDS", "IMPORT_MAX_FILE_BYTES")
    @classmethod
    def _must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime.  Import this function anywhere you
    need access to configuration::

        from app.config import get_settings
        settings = get_settings()
    """
    return Settings()  # type: ignore[call-arg]
