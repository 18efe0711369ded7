# tests/conftest.py

import os

# Settings are read on import, so the test database must be chosen first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DEFAULT_CLUB_TIMEZONE"] = "Europe/Kyiv"
os.environ["DEFAULT_COURT_PRICE_CENTS"] = "1000"

import pytest
from starlette.testclient import TestClient

from app.main import app


@pytest.fixture(scope="session")
def test_client():
    """
    Provides a TestClient backed by an in-memory SQLite database.

    One client (and one event loop) is shared by the whole session, so tests
    create their own clubs and courts instead of relying on an empty database.
    """
    with TestClient(app) as client:
        yield client
