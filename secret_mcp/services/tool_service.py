"""Agent tools — search and export without ever returning a secret value."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from secret_mcp.database import SecretStore
from secret_mcp.errors import SecretStoreError
from secret_mcp.schemas.tool import (
    SearchSecretsArgs,
    ToolCall,
    ToolContent,
    ToolDescriptor,
    ToolResult,
    WriteEnvArgs,
)
from secret_mcp.services import env_service, secret_service

logger = logging.getLogger(__name__)

TOOLS: list[ToolDescriptor] = [
    ToolDescriptor(
        name="search_secrets",
        description=(
            "Search for secrets by name or description. Returns names and descriptions "
            "only, never values. Use this to find secrets before writing them to a .env file."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query to match against secret names and descriptions",
                },
            },
            "required": ["query"],
        },
    ),
    ToolDescriptor(
        name="write_env",
        description=(
            "Write specified secrets to a .env file. Values are retrieved securely and never "
            "exposed to the AI. The file is created with restricted permissions (600)."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "keys": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Secret names to include in the .env file",
                },
                "path": {
                    "type": "string",
                    "description": "Absolute path where the .env file should be written",
                },
            },
            "required": ["keys", "path"],
        },
    ),
]


class UnknownTool(ValueError):
    pass


async def _search(store: SecretStore, call: ToolCall) -> str:
    args = SearchSecretsArgs.model_validate(call.arguments)
    async with store.session() as db:
        results = await secret_service.search_secrets(db, args.query)
    return json.dumps([r.model_dump() for r in results], indent=2)


async def _write_env(store: SecretStore, call: ToolCall) -> str:
    args = WriteEnvArgs.model_validate(call.arguments)
    result = await env_service.write_env(store, args.keys, args.path)
    return env_service.summarize(result)


_HANDLERS = {
    "search_secrets": _search,
    "write_env": _write_env,
}


async def call_tool(store: SecretStore, call: ToolCall) -> ToolResult:
    """Run a tool; failures come back as an error result, not an exception."""
    handler = _HANDLERS.get(call.name)
    try:
        if handler is None:
            raise UnknownTool(f"Unknown tool: {call.name}")
        text = await handler(store, call)
    except (SecretStoreError, SQLAlchemyError, ValidationError, UnknownTool, OSError) as exc:
        logger.warning("Tool %s failed: %s", call.name, exc)
        return ToolResult(content=[ToolContent(text=f"Error: {exc}")], is_error=True)
    return ToolResult(content=[ToolContent(text=text)])
