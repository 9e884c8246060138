"""Reply delivery to Telegram chats.

Fire-and-forget: send failures are logged, never raised, so a Telegram outage
cannot turn a saved bookmark into a crashed background task.
"""

import logging

from telegram.error import TelegramError

from link_saver.bot.client import get_telegram_bot

logger = logging.getLogger(__name__)


async def send_reply(chat_id: int, text: str) -> None:
    """Send a plain text reply to ``chat_id``."""
    try:
        bot = get_telegram_bot()
        await bot.send_message(chat_id=chat_id, text=text)
    except TelegramError:
        logger.warning("Failed to send reply to chat %s: %r", chat_id, text, exc_info=True)
