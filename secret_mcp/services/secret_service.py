"""Secret service — the record store behind every secret operation."""

from __future__ import annotations

import logging
import time
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from secret_mcp.errors import DuplicateName, NotFound
from secret_mcp.models.secret import Secret
from secret_mcp.schemas.secret import SecretCreate, SecretSearchResult, SecretUpdate

logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


def _is_name_conflict(exc: IntegrityError) -> bool:
    # sqlite reports "UNIQUE constraint failed: secrets.name"
    return "secrets.name" in str(exc.orig)


async def _commit(db: AsyncSession, name: str) -> None:
    """Commit, turning a name uniqueness violation into ``DuplicateName``."""
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if _is_name_conflict(exc):
            logger.info("Rejected duplicate secret name %r", name)
            raise DuplicateName(name) from exc
        raise


async def list_secrets(db: AsyncSession) -> list[Secret]:
    result = await db.execute(select(Secret).order_by(Secret.name))
    return list(result.scalars().all())


async def get_secret(db: AsyncSession, secret_id: str) -> Secret | None:
    return await db.get(Secret, secret_id)


async def create_secret(db: AsyncSession, data: SecretCreate) -> Secret:
    now = _now()
    secret = Secret(
        id=str(uuid.uuid4()),
        name=data.name,
        description=data.description,
        value=data.value,
        created_at=now,
        updated_at=now,
    )
    db.add(secret)
    await _commit(db, data.name)
    await db.refresh(secret)
    logger.info("Created secret %r (%s)", secret.name, secret.id)
    return secret


async def update_secret(db: AsyncSession, secret_id: str, data: SecretUpdate) -> Secret:
    """Overwrite name, description and value; id and created_at stay as stored."""
    secret = await db.get(Secret, secret_id)
    if secret is None:
        raise NotFound(secret_id)

    secret.name = data.name
    secret.description = data.description
    secret.value = data.value
    secret.updated_at = _now()

    await _commit(db, data.name)
    await db.refresh(secret)
    logger.info("Updated secret %r (%s)", secret.name, secret.id)
    return secret


async def delete_secret(db: AsyncSession, secret_id: str) -> bool:
    result = await db.execute(delete(Secret).where(Secret.id == secret_id))
    await db.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted secret %s", secret_id)
    return deleted


def _matches(needle: str, name: str, description: str | None) -> bool:
    return needle in name.casefold() or needle in (description or "").casefold()


async def search_secrets(db: AsyncSession, query: str) -> list[SecretSearchResult]:
    """Case-insensitive substring match on name or description, ordered by name.

    An empty query matches every secret. Folding is done with ``str.casefold``
    so non-ASCII names match regardless of case.
    """
    needle = query.casefold()
    result = await db.execute(select(Secret.name, Secret.description).order_by(Secret.name))
    return [
        SecretSearchResult(name=name, description=description)
        for name, description in result.all()
        if _matches(needle, name, description)
    ]


async def resolve_values(db: AsyncSession, names: list[str]) -> list[tuple[str, str]]:
    """Return ``(name, value)`` for each requested name that exists, in request order.

    Unknown names are skipped. A name requested twice is resolved twice.
    """
    wanted = set(names)
    if not wanted:
        return []
    result = await db.execute(select(Secret.name, Secret.value).where(Secret.name.in_(wanted)))
    found = {name: value for name, value in result.all()}
    return [(name, found[name]) for name in names if name in found]
