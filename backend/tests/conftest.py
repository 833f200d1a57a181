"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- An in-memory database shared by fixtures and the application
- A provisioned test user and an HTTP client bound to the app
"""

import base64
import os
import sys
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test_secret_key_at_least_32_characters_long_for_sessions"
os.environ["BCRYPT_ROUNDS"] = "4"  # Fast hashing for tests
os.environ["ADMIN_USERNAME"] = "user"
os.environ["ADMIN_PASSWORD"] = "test_password"
os.environ["CORS_ORIGINS"] = '["http://localhost:8080"]'
os.environ["LOG_JSON"] = "true"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


TEST_USERNAME = "user"
TEST_PASSWORD = "test_password"


def basic_auth_header(username: str, password: str) -> dict:
    """Build an ``Authorization: Basic`` header."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture(scope="function")
async def async_session():
    """
    Provide an async database session.

    Tables are created on the application's engine, so requests made
    through the ``client`` fixture see the same data. Everything is
    dropped after the test.
    """
    from carmaint.core.database import engine, async_session_maker
    from carmaint.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.commit()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def test_user(async_session):
    """Create the login account used by the API tests."""
    from carmaint.core.security import get_password_hash
    from carmaint.models.user import User

    user = User(username=TEST_USERNAME, hashed_password=get_password_hash(TEST_PASSWORD))
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
def auth_headers():
    """Valid Basic credentials for the test user."""
    return basic_auth_header(TEST_USERNAME, TEST_PASSWORD)


@pytest.fixture
def make_basic_auth():
    """Factory for arbitrary Basic headers."""
    return basic_auth_header


@pytest.fixture
async def client(test_user):
    """
    HTTP client bound to the application.

    The lifespan does not run under ASGITransport; the schema and user
    come from the fixtures above.
    """
    from httpx import ASGITransport, AsyncClient

    from carmaint.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
async def car(async_session):
    """A stored car."""
    from carmaint.models.car import Car

    car = Car(make="Toyota", model="Corolla", year=2018)
    async_session.add(car)
    await async_session.commit()
    await async_session.refresh(car)
    return car
