"""
Pytest configuration for integration tests.

Each test gets a full application on its own SQLite file, a recording
asset store in place of ImageKit, and one seeded admin account.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from schoolcms.api.main import create_app
from schoolcms.services import AdminService, DatabaseService, SqlStore
from schoolcms.services.database import AdminRow
from schoolcms.settings import CorruptionPolicy, Settings

ADMIN = {"username": "principal", "password": "s3cretpass"}


def pytest_collection_modifyitems(items):
    """Add markers to integration tests."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def run_db(database_url: str, action: Callable[[DatabaseService], Awaitable[Any]]) -> Any:
    """Run ``action`` against the test database on a private engine."""

    async def run():
        db = DatabaseService(database_url)
        try:
            await db.create_all()
            return await action(db)
        finally:
            await db.dispose()

    return asyncio.run(run())


def build_settings(database_url: str, policy: CorruptionPolicy = CorruptionPolicy.SKIP) -> Settings:
    return Settings(
        _env_file=None,
        database={"url": database_url},
        imagekit={
            "public_key": "public_test",
            "private_key": "private_test",
            "url_endpoint": "https://ik.imagekit.io/school",
        },
        auth={"session_secret": "integration-test-secret"},
        lifecycle={"corruption_policy": policy},
    )


@pytest.fixture
def make_client(database_url, assets):
    """Factory for a TestClient; the admin account is seeded first."""
    clients = []

    run_db(database_url, lambda db: AdminService(SqlStore(db, AdminRow)).register(ADMIN))

    def factory(policy: CorruptionPolicy = CorruptionPolicy.SKIP) -> TestClient:
        app = create_app(
            settings=build_settings(database_url, policy),
            db=DatabaseService(database_url),
            assets=assets,
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def admin_client(client) -> TestClient:
    response = client.post("/api/admin/login", json=ADMIN)
    assert response.status_code == 200
    return client
