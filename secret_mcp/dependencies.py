"""FastAPI dependencies for reaching the store."""

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from secret_mcp.database import SecretStore
from secret_mcp.errors import StoreUnavailable


def get_store(request: Request) -> SecretStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailable()
    return store


async def get_db(store: SecretStore = Depends(get_store)) -> AsyncIterator[AsyncSession]:
    async with store.session() as session:
        yield session
