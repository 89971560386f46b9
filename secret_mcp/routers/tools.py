"""Agent tool endpoints."""

from fastapi import APIRouter, Depends

from secret_mcp.database import SecretStore
from secret_mcp.dependencies import get_store
from secret_mcp.schemas.tool import ToolCall, ToolDescriptor, ToolResult
from secret_mcp.services import tool_service

router = APIRouter()


@router.get("/", response_model=list[ToolDescriptor])
async def list_tools():
    return tool_service.TOOLS


@router.post("/call", response_model=ToolResult)
async def call_tool(body: ToolCall, store: SecretStore = Depends(get_store)):
    return await tool_service.call_tool(store, body)
