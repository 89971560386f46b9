"""Secret CRUD, search and .env export endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from secret_mcp.database import SecretStore
from secret_mcp.dependencies import get_db, get_store
from secret_mcp.schemas.secret import (
    DeleteResult,
    SecretCreate,
    SecretInfo,
    SecretResponse,
    SecretSearchResult,
    SecretUpdate,
    StorePath,
    WriteEnvRequest,
    WriteEnvResult,
)
from secret_mcp.services import env_service, secret_service

router = APIRouter()


@router.get("/", response_model=list[SecretInfo])
async def list_secrets(db: AsyncSession = Depends(get_db)):
    return await secret_service.list_secrets(db)


@router.get("/search", response_model=list[SecretSearchResult])
async def search_secrets(query: str = "", db: AsyncSession = Depends(get_db)):
    return await secret_service.search_secrets(db, query)


@router.get("/store-path", response_model=StorePath)
async def get_store_path(store: SecretStore = Depends(get_store)):
    return StorePath(path=str(store.path))


@router.post("/write-env", response_model=WriteEnvResult)
async def write_env(body: WriteEnvRequest, store: SecretStore = Depends(get_store)):
    return await env_service.write_env(store, body.names, body.path)


@router.get("/{secret_id}", response_model=SecretResponse)
async def get_secret(secret_id: str, db: AsyncSession = Depends(get_db)):
    secret = await secret_service.get_secret(db, secret_id)
    if not secret:
        raise HTTPException(status_code=404, detail="Secret not found")
    return secret


@router.post("/", response_model=SecretResponse, status_code=201)
async def create_secret(data: SecretCreate, db: AsyncSession = Depends(get_db)):
    return await secret_service.create_secret(db, data)


@router.put("/{secret_id}", response_model=SecretResponse)
async def update_secret(secret_id: str, data: SecretUpdate, db: AsyncSession = Depends(get_db)):
    return await secret_service.update_secret(db, secret_id, data)


@router.delete("/{secret_id}", response_model=DeleteResult)
async def delete_secret(secret_id: str, db: AsyncSession = Depends(get_db)):
    return DeleteResult(deleted=await secret_service.delete_secret(db, secret_id))
