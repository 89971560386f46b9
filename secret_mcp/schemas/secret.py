"""Secret request/response schemas."""

from pydantic import BaseModel, Field


class SecretCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    value: str


class SecretUpdate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    value: str


class SecretInfo(BaseModel):
    """Masked view used for listings."""

    id: str
    name: str
    description: str | None
    created_at: int
    updated_at: int
    # value is NEVER returned here

    model_config = {"from_attributes": True}


class SecretResponse(SecretInfo):
    """Full view, returned for single reads, creates and updates."""

    value: str


class SecretSearchResult(BaseModel):
    name: str
    description: str | None

    model_config = {"from_attributes": True}


class DeleteResult(BaseModel):
    deleted: bool


class StorePath(BaseModel):
    path: str


class WriteEnvRequest(BaseModel):
    names: list[str]
    path: str


class WriteEnvResult(BaseModel):
    success: bool = True
    path: str
    written: int
    missing: list[str] = []
