"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from link_saver.app import app
from link_saver.bot.client import reset_client
from link_saver.config import get_settings
from link_saver.linkding.service import reset_link_service


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app (lifespan not started)."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Drop cached settings, bot, and service between tests."""
    get_settings.cache_clear()
    reset_client()
    reset_link_service()
    yield
    get_settings.cache_clear()
    reset_client()
    reset_link_service()
