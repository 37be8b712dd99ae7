"""Shared fixtures for URL Shortener Service tests."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shortlinks.main import app
from shortlinks.core.config import Settings
from shortlinks.core.database import Database, get_db, get_test_db
from shortlinks.services.link_service import LinkService


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = get_test_db()
    yield db
    db.close()


@pytest.fixture
def test_settings():
    """Settings with a fixed public base URL."""
    return Settings(base_url="https://sho.rt", blocked_hosts=["localhost", "127.0.0.1"])


@pytest.fixture
def service(test_db, test_settings):
    """Link service bound to the in-memory database."""
    return LinkService(test_db, test_settings)


def make_client(db):
    """Build a TestClient whose requests use ``db`` and skip the real lifespan."""
    app.dependency_overrides[get_db] = lambda: db

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(test_db):
    """Create a test client with the in-memory database."""
    original_lifespan = app.router.lifespan_context
    with make_client(test_db) as client:
        yield client
    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """Create a mock database."""
    return MagicMock(spec=Database)


@pytest.fixture
def failing_client(mock_db):
    """Test client backed by a mock database, for store failure cases."""
    original_lifespan = app.router.lifespan_context
    with make_client(mock_db) as client:
        yield client
    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()
