"""Store handle — one async SQLite engine per store file, serialized access."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from secret_mcp.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class SecretStore:
    """Handle to the backing secrets database.

    The handle starts uninitialized; ``init()`` opens (creating if absent) the
    SQLite file and ensures the schema. Every session is taken under a single
    ``asyncio.Lock`` so at most one logical operation touches the connection
    at a time.
    """

    def __init__(self, path: Path | str, echo: bool = False):
        self._path = Path(path)
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def initialized(self) -> bool:
        return self._sessionmaker is not None

    async def init(self) -> None:
        """Open the store file and create the schema if needed. Idempotent."""
        # Registers the ORM tables on Base.metadata
        from secret_mcp import models  # noqa: F401

        async with self._lock:
            if self._engine is not None:
                return
            self._path.parent.mkdir(parents=True, exist_ok=True)
            engine = create_async_engine(f"sqlite+aiosqlite:///{self._path}", echo=self._echo)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._engine = engine
            self._sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info("Secret store ready at %s", self._path)

    async def close(self) -> None:
        async with self._lock:
            if self._engine is None:
                return
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
        logger.info("Secret store closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session while holding the store lock.

        Raises ``StoreUnavailable`` when ``init()`` has not been called.
        """
        async with self._lock:
            if self._sessionmaker is None:
                raise StoreUnavailable()
            async with self._sessionmaker() as session:
                yield session
