"""Shared fixtures: a fresh store per test and an HTTP client bound to it."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from secret_mcp.database import SecretStore
from secret_mcp.dependencies import get_store
from secret_mcp.main import app


@pytest_asyncio.fixture
async def store(tmp_path):
    store = SecretStore(tmp_path / "data" / "secrets.db")
    await store.init()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def db(store):
    # Holds the store lock; don't combine with calls that take their own session.
    async with store.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
