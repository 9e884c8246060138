"""Application configuration via pydantic-settings."""

import re
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_USERNAME_SEPARATORS = re.compile(r"[,\s]+")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Telegram
    telegram_bot_token: str = ""
    telegram_webhook_secret: str = ""
    telegram_webhook_url: str = ""
    allowed_usernames: str = ""  # Comma or whitespace separated

    # linkding
    linkding_base_url: str = ""
    linkding_api_token: str = ""

    # Pipeline
    http_timeout_seconds: float = 10.0
    link_preview_first: bool = False

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    @property
    def allowed_username_set(self) -> frozenset[str]:
        """Allowed sender usernames, without a leading '@'."""
        names = _USERNAME_SEPARATORS.split(self.allowed_usernames)
        return frozenset(name.lstrip("@") for name in names if name.lstrip("@"))

    def missing_required(self) -> list[str]:
        """Return the names of required settings that are empty."""
        missing = []
        if not self.telegram_bot_token:
            missing.append("telegram_bot_token")
        if not self.allowed_username_set:
            missing.append("allowed_usernames")
        if not self.linkding_base_url:
            missing.append("linkding_base_url")
        if not self.linkding_api_token:
            missing.append("linkding_api_token")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
