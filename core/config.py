"""
Application configuration.

All settings read from environment variables (or a ``.env`` file in the
working directory) with local dev defaults.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- Case service --
    API_BASE_URL: Optional[str] = Field(
        default=None,
        description="Base URL of the case service, e.g. http://localhost:8080.",
    )
    REQUEST_TIMEOUT: float = Field(
        default=15.0,
        description="Per-request timeout in seconds.",
    )

    # -- Identity --
    DEFAULT_TENANT_ID: str = "demo-tenant"
    DEFAULT_USER_ID: str = "demo-user"
    IDENTITY_FILE: str = Field(
        default="identity.json",
        description="Where the tenant/user chosen on the Settings page is kept.",
    )

    # -- Logging --
    LOG_LEVEL: str = "INFO"

    @property
    def api_base_url(self) -> Optional[str]:
        """Configured base URL with surrounding whitespace removed, or ``None``."""
        value = (self.API_BASE_URL or "").strip()
        return value or None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
