"""Telegram webhook secret verification as a FastAPI dependency."""

import hmac
import logging

from fastapi import HTTPException, Request

from link_saver.config import get_settings

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


async def verify_telegram_request(request: Request) -> dict:
    """Check the webhook secret header and return the parsed JSON payload.

    Telegram echoes the ``secret_token`` passed to setWebhook in every
    delivery. The check is skipped when no secret is configured.

    A body that is not JSON yields an empty payload, which the update
    handler acknowledges and ignores so Telegram does not redeliver it.

    Raises HTTPException(403) if the header does not match.
    """
    settings = get_settings()
    expected = settings.telegram_webhook_secret
    if expected:
        received = request.headers.get(SECRET_HEADER, "")
        if not hmac.compare_digest(received.encode(), expected.encode()):
            raise HTTPException(status_code=403, detail="Invalid Telegram secret token")

    try:
        return await request.json()
    except ValueError:
        logger.warning("Ignoring webhook body that is not JSON", exc_info=True)
        return {}
