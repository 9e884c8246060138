"""FastAPI application with lifespan and health endpoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from link_saver.bot.client import get_telegram_bot
from link_saver.bot.router import router as telegram_router
from link_saver.config import get_settings
from link_saver.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, validate config, start the bot.

    Registers the webhook when telegram_webhook_url is set; otherwise the
    webhook is expected to be registered out of band.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    missing = settings.missing_required()
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")
    app.state.settings = settings
    logger.info(
        "Config loaded; allowed usernames: %s",
        sorted(settings.allowed_username_set),
    )

    bot = get_telegram_bot()
    await bot.initialize()
    me = await bot.get_me()
    logger.info("Bot username: @%s", me.username)

    if settings.telegram_webhook_url:
        await bot.set_webhook(
            url=settings.telegram_webhook_url,
            secret_token=settings.telegram_webhook_secret or None,
            allowed_updates=["message"],
        )
        logger.info("Webhook registered: %s", settings.telegram_webhook_url)

    try:
        yield
    finally:
        await bot.shutdown()


app = FastAPI(
    title="Link Saver",
    lifespan=lifespan,
)
app.include_router(telegram_router)


@app.get("/health")
async def health():
    """Health check endpoint for container orchestration and local development."""
    return {
        "status": "ok",
        "service": "link-saver",
        "version": "0.1.0",
    }
