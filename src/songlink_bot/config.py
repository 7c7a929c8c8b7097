"""Application configuration via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""
    signature_max_age_seconds: int = 300  # Slack recommends 5 minutes

    # Songlink (Odesli)
    songlink_api_url: str = "https://api.song.link/v1-alpha.1/links"
    songlink_api_key: str = ""
    songlink_user_country: str = ""

    # Songwhip
    songwhip_api_url: str = "https://songwhip.com/"

    # Resolution
    resolver_timeout_seconds: float = 10.0
    events_resolver: Literal["songlink", "songwhip"] = "songlink"
    commands_resolver: Literal["songlink", "songwhip"] = "songwhip"
    max_urls_per_message: int = 10

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
