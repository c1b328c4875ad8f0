"""
Pytest configuration and fixtures for SchoolCMS tests.
"""

from pathlib import Path

import pytest
import pytest_asyncio

from schoolcms.errors import ExternalServiceError
from schoolcms.services.database import DatabaseService
from tests.fakes import FakeAssetStore, FakeStore


@pytest.fixture
def assets() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def failing_assets() -> FakeAssetStore:
    store = FakeAssetStore()
    store.error = ExternalServiceError("ImageKit bulk delete timed out")
    return store


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'schoolcms-test.db'}"


@pytest_asyncio.fixture
async def sqlite_db(database_url: str):
    """DatabaseService with all tables created on a temp SQLite file."""
    db = DatabaseService(database_url)
    await db.create_all()
    yield db
    await db.dispose()
