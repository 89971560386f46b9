"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from secret_mcp.config import settings
from secret_mcp.database import SecretStore
from secret_mcp.dependencies import get_store
from secret_mcp.errors import ErrorKind, SecretStoreError
from secret_mcp.routers import secrets, tools

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.STORE_UNAVAILABLE: 503,
    ErrorKind.DUPLICATE_NAME: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PATH_NOT_ABSOLUTE: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    store = SecretStore(settings.database_path, echo=(settings.env == "development"))
    await store.init()
    app.state.store = store

    yield

    # Shutdown
    await store.close()


app = FastAPI(
    title="secret-mcp",
    description="Local secret store with .env export",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SecretStoreError)
async def secret_store_error_handler(request: Request, exc: SecretStoreError):
    status = _STATUS_BY_KIND.get(exc.kind, 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"detail": exc.message, "kind": exc.kind.value})


@app.exception_handler(OSError)
@app.exception_handler(SQLAlchemyError)
async def io_error_handler(request: Request, exc: Exception):
    """Pass filesystem and storage failures through with their own message."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# Mount routers
app.include_router(secrets.router, prefix="/api/secrets", tags=["secrets"])
app.include_router(tools.router, prefix="/api/tools", tags=["tools"])


@app.get("/health")
async def health(store: SecretStore = Depends(get_store)):
    return {
        "status": "ok",
        "service": "secret-mcp",
        "store": str(store.path),
    }


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
