"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    telegram_bot_token: str
    supabase_url: str
    supabase_service_key: str
    imgur_client_id: str
    admin_user_ids: str | None = None
    catalog_table: str = "lyrics"
    session_idle_timeout_minutes: int = 30
    telegram_webhook_secret: str | None = None
    polling_timeout_seconds: int = 60
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_user_ids(raw: str | None) -> set[int]:
    """Parse a comma-separated list of Telegram user IDs.

    Blank chunks and non-numeric values are skipped, so an unset or empty
    value yields an empty set (nobody is privileged).
    """
    if raw is None:
        return set()
    ids: set[int] = set()
    for chunk in raw.split(","):
        value = chunk.strip()
        if value.isdigit():
            ids.add(int(value))
    return ids
