"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The application is pointed at a throwaway SQLite database before any app module
is imported; every test starts from freshly created, empty tables.
"""

import asyncio
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="portfolio-api-tests-"))

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_DIR"] = str(_TEST_ROOT / "logs")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

ADMIN_NAME = "Admin User"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"


def run_sync(coro):
    """
    Run a coroutine on a private event loop.

    The loop is never installed as the current one, so pytest-asyncio's loop for
    async tests is left alone.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture(autouse=True)
def clean_db():
    """Drop and recreate every table so tests never see each other's rows."""
    from app.db import reset_db

    run_sync(reset_db())
    yield


@pytest.fixture
def app() -> FastAPI:
    """
    Create a new application instance for each test.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Fixture to get a test client for making API requests.
    The TestClient handles the application's lifespan events (startup/shutdown).
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_user():
    """The provisioned admin account."""
    from app.db_handlers import UserDBHandler

    return run_sync(
        UserDBHandler().create_account(ADMIN_NAME, ADMIN_EMAIL, ADMIN_PASSWORD)
    )


@pytest.fixture
def auth_client(client: TestClient, admin_user) -> TestClient:
    """A client holding a valid session cookie for the admin account."""
    response = client.post(
        "/auth/login", json={"name": ADMIN_NAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def run_async():
    """Run a coroutine to completion from synchronous test code."""
    return run_sync
