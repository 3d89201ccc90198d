"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SteamConfig(BaseSettings):
    """Steam Community / Store specific configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    community_url: str = Field(
        default="https://steamcommunity.com",
        description="Base URL for Steam Community (feeds and profiles)",
    )
    store_host: str = Field(
        default="store.steampowered.com",
        description="Host name of the Steam Store, used to recognise store page URLs",
    )
    request_delay_ms: int = Field(
        default=250,
        ge=0,
        description="Delay in milliseconds between consecutive HTTP requests",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=1,
        le=120,
        description="HTTP request timeout in seconds",
    )
    user_agent: str = Field(
        default="SteamFeeds/0.1 (+https://github.com/steam-feeds/steam-feeds)",
        description="User-Agent header sent with every request",
    )

    @field_validator("community_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so paths can be appended with a single slash."""
        return v.rstrip("/")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    steam: SteamConfig = Field(default_factory=SteamConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
