"""Telegram update dispatch and per-message reply logic."""

import logging
from collections.abc import Collection

from fastapi import BackgroundTasks
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from link_saver.bot.notifier import send_reply
from link_saver.bot.urls import UrlExtractor, build_url_extractor, extract_urls
from link_saver.config import get_settings
from link_saver.errors import LinkServiceError, UnexpectedStatusError, describe_chain, error_chain
from link_saver.linkding.service import LinkService, get_link_service
from link_saver.models.telegram import Message, TelegramUpdate

logger = logging.getLogger(__name__)

REPLY_NOT_ALLOWED = "You are not allowed to use this bot"
REPLY_NO_URLS = "No URLs found in the message"
REPLY_ERROR = "Error"
REPLY_SAVED = "Saved!"


async def handle_message(
    message: Message,
    *,
    allowed_usernames: Collection[str],
    link_service: LinkService,
    extract: UrlExtractor = extract_urls,
) -> str:
    """Save the first URL of ``message`` and return the reply text.

    Never raises: every outcome, including unexpected exceptions, maps to
    one of the REPLY_* strings. Failure details are logged, not sent.
    """
    username = message.username
    if username is None or username not in allowed_usernames:
        logger.warning("Rejected message from %s in chat %s", username, message.chat.id)
        return REPLY_NOT_ALLOWED

    logger.info("Received message %s from %s", message.message_id, username)

    urls = extract(message)
    if not urls:
        return REPLY_NO_URLS

    url = urls[0]
    try:
        await link_service.save(url)
    except LinkServiceError as exc:
        chain = error_chain(exc)
        status_codes = [e.status_code for e in chain if isinstance(e, UnexpectedStatusError)]
        logger.error(
            "Couldn't save a link: %s",
            describe_chain(exc),
            extra={
                "url": url,
                "error_chain": [type(e).__name__ for e in chain],
                "status_code": status_codes[0] if status_codes else None,
            },
        )
        return REPLY_ERROR
    except Exception:
        logger.exception("Unexpected failure while saving %s", url)
        return REPLY_ERROR

    return REPLY_SAVED


def handle_telegram_update(payload: dict, background_tasks: BackgroundTasks) -> JSONResponse:
    """Dispatch a Telegram update.

    - new message: processed in the background, one reply per message
    - anything else (edits, channel posts, callbacks, malformed payloads):
      acknowledged and ignored
    """
    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError:
        logger.warning("Ignoring malformed update", exc_info=True)
        return JSONResponse({"ok": True})

    if update.message is None:
        return JSONResponse({"ok": True})

    background_tasks.add_task(process_message, update.message)
    return JSONResponse({"ok": True})


async def process_message(message: Message) -> None:
    """Handle one message and send exactly one reply to its chat."""
    settings = get_settings()
    reply = await handle_message(
        message,
        allowed_usernames=settings.allowed_username_set,
        link_service=get_link_service(),
        extract=build_url_extractor(settings.link_preview_first),
    )
    await send_reply(message.chat.id, reply)
