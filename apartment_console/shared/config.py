"""
Centralized configuration for the apartment console.

All settings are loaded from environment variables with sensible defaults.
Variables are prefixed with CONSOLE_ (e.g., CONSOLE_API_URL).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CONSOLE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Apartment Console"
    app_version: str = "0.1.0"
    log_level: str = "WARNING"

    # Remote API
    api_url: str = "http://localhost:8000/api"
    assets_url: str = ""  # falls back to api_url
    request_timeout: float = 30.0  # seconds

    # Session
    token_storage_path: str = ""  # empty disables durable token storage
    token_expiry_margin: int = 10  # seconds
    storage_poll_interval: float = 2.0  # seconds

    # Lists
    page_size: int = 10

    @property
    def resolved_assets_url(self) -> str:
        """Base URL for image assets."""
        return (self.assets_url or self.api_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
