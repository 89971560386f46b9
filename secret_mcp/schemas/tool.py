"""Agent tool schemas — descriptors, calls and text results."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolDescriptor(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any]


class ToolCall(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    content: list[ToolContent]
    is_error: bool = False


class SearchSecretsArgs(BaseModel):
    query: str


class WriteEnvArgs(BaseModel):
    keys: list[str]
    path: str
