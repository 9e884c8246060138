"""Telegram webhook router with secret token verification."""

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from link_saver.bot.handlers import handle_telegram_update
from link_saver.bot.verification import verify_telegram_request

router = APIRouter(prefix="", tags=["telegram"])


@router.post("/telegram/webhook")
async def telegram_webhook(
    background_tasks: BackgroundTasks,
    payload: dict = Depends(verify_telegram_request),
) -> JSONResponse:
    """Receive Telegram updates.

    Always acknowledged with 200 once verified; Telegram redelivers anything
    else, which would save the same link twice.
    """
    return handle_telegram_update(payload, background_tasks)
