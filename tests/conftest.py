"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from intake_service.config import Settings
from intake_service.main import create_app


ADMIN_AUTH = ("admin", "testpassword")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        environment="development",
        admin_username="admin",
        admin_password="testpassword",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'intakes.db'}",
    )


@pytest.fixture
def app(settings):
    return create_app(settings, configure_logging=False)


@pytest_asyncio.fixture
async def client(app):
    """HTTP client with the application lifespan (tables created) running."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
def auth():
    return ADMIN_AUTH


@pytest.fixture
def intake_payload():
    """Valid creation payload; override fields per test."""
    def _build(**overrides):
        payload = {
            "name": "John Doe",
            "email": "john@example.com",
            "description": "I need help with an invoice that was overcharged",
            "urgency": 3,
        }
        payload.update(overrides)
        return payload
    return _build
