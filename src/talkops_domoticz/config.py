"""talkops-domoticz Configuration Management.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DomoticzSettings(BaseSettings):
    """Domoticz controller connection settings."""

    model_config = SettingsConfigDict(env_prefix="DOMOTICZ_")

    base_url: str = "http://domoticz:8080"
    username: str = "admin"
    password: str = "domoticz"

    # Poll cycle
    poll_interval: float = Field(default=5.0, gt=0)
    request_timeout: float = Field(default=10.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop trailing slashes."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TALKOPS_DOMOTICZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # API Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Nested settings
    domoticz: DomoticzSettings = Field(default_factory=DomoticzSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()
