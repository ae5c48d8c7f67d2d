"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture
def settings():
    """Fresh settings for the test environment."""
    from api.config import get_settings

    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def audit_context(settings):
    """Run context with an empty computed artifact cache."""
    from auditor.audits.base import AuditContext

    return AuditContext.create(settings=settings)


@pytest.fixture
async def client(settings) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against a fresh app."""
    from api.main import create_app

    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
