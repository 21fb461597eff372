"""
Client Configuration

Centralized configuration using Pydantic Settings for type-safe
environment variable management with validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file, then go up to the project root
_CONFIG_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Example: HANKO_API_URL=https://auth.example.com
    """

    model_config = SettingsConfigDict(
        env_file=_CONFIG_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    hanko_api_url: str = "http://localhost:8000"
    hanko_request_timeout: float = 13.0  # seconds

    # Local State Configuration
    hanko_state_key: str = "hanko"  # Storage key of the timing blob
    hanko_cookie_name: str = "hanko"  # Cookie holding the bearer token
    hanko_state_file: str | None = None  # File-backed storage when set, in-memory otherwise

    # Logging
    log_level: str = "INFO"
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached client settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused throughout the process lifecycle.
    """
    return Settings()
