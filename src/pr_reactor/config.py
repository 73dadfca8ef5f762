"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""
    slack_request_max_age_seconds: int = 300

    # GitHub
    github_webhook_secret: str = ""

    # Tracking store
    tracking_backend: str = "database"  # "database" or "memory"
    database_url: str = "sqlite+aiosqlite:///./data/pr_reactor.db"

    # Reactions (Slack emoji names, without colons)
    reaction_timeout_seconds: float = 10.0
    emoji_closed: str = "wastebasket"
    emoji_merged: str = "shipit"
    emoji_commented: str = "scroll"
    emoji_changes_requested: str = "warning"
    emoji_approved: str = "white_check_mark"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
