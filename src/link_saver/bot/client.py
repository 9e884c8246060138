"""Telegram Bot API client singleton.

Creates a cached ``telegram.Bot`` configured with the bot token from
application settings. The FastAPI lifespan initializes and shuts it down.
"""

from telegram import Bot

from link_saver.config import get_settings

_bot: Bot | None = None


def get_telegram_bot() -> Bot:
    """Return a cached Bot instance.

    Creates the bot on first call using telegram_bot_token from settings.
    Subsequent calls return the cached instance.
    """
    global _bot
    if _bot is None:
        settings = get_settings()
        _bot = Bot(token=settings.telegram_bot_token)
    return _bot


def reset_client() -> None:
    """Reset the cached bot instance. Used for testing."""
    global _bot
    _bot = None
