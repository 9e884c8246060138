"""Telegram ingress: webhook handling, URL extraction, and replies."""

from link_saver.bot.client import get_telegram_bot, reset_client
from link_saver.bot.handlers import handle_message
from link_saver.bot.notifier import send_reply
from link_saver.bot.router import router
from link_saver.bot.urls import build_url_extractor, extract_urls

__all__ = [
    "build_url_extractor",
    "extract_urls",
    "get_telegram_bot",
    "handle_message",
    "reset_client",
    "router",
    "send_reply",
]
