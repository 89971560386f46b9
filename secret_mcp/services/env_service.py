"""Export service — write resolved secrets to a .env file."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from secret_mcp.database import SecretStore
from secret_mcp.errors import PathNotAbsolute
from secret_mcp.schemas.secret import WriteEnvResult
from secret_mcp.services import secret_service

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = (" ", '"', "'", "\n")


def format_env_value(value: str) -> str:
    """Quote a value if it contains a space, a quote or a newline."""
    if any(ch in value for ch in _NEEDS_QUOTES):
        escaped = value.replace('"', '\\"')
        return f'"{escaped}"'
    return value


def render_env(pairs: list[tuple[str, str]]) -> str:
    return "".join(f"{name}={format_env_value(value)}\n" for name, value in pairs)


def _write_file(dest: Path, content: str) -> None:
    """Replace ``dest`` with ``content`` in one rename.

    A symlinked ``dest`` keeps its link; the file it points at is replaced.
    """
    target = dest.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates the file with mode 0600
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def write_env(store: SecretStore, names: list[str], path: str) -> WriteEnvResult:
    """Resolve ``names`` and write them to the absolute ``path``.

    Names that do not exist are reported in ``missing``; they are not an
    error. The store lock is only held while values are resolved.
    """
    dest = Path(path)
    if not dest.is_absolute():
        raise PathNotAbsolute(path)

    async with store.session() as db:
        pairs = await secret_service.resolve_values(db, names)

    found = {name for name, _ in pairs}
    missing = [name for name in names if name not in found]

    await asyncio.to_thread(_write_file, dest, render_env(pairs))
    logger.info("Wrote %d secret(s) to %s (%d missing)", len(pairs), dest, len(missing))
    return WriteEnvResult(path=str(dest), written=len(pairs), missing=missing)


def summarize(result: WriteEnvResult) -> str:
    message = f"Successfully wrote {result.written} secret(s) to {result.path}"
    if result.missing:
        message += f"\nMissing secrets (not found): {', '.join(result.missing)}"
    return message
