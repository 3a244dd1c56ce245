"""
FastAPI application factory.

create_app(settings) opens (or creates) the database file, wires the operation
layer and the bearer-gated key-value router, and returns the app. Settings and
the service live on app.state for the lifetime of the process; nothing else is
shared between requests.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from ywkv import __version__
from ywkv.api_server.routes import router as kv_router
from ywkv.config import Settings
from ywkv.database import Database, get_database
from ywkv.operations import KeyValueService
from ywkv.ywkv_logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log start and graceful shutdown (uvicorn handles SIGINT/SIGTERM)."""
    settings: Settings = app.state.settings
    logger.info(
        "server_started",
        table_name=settings.table_name,
        db_path=str(settings.db_path),
    )
    yield
    logger.info("server_shutdown", message="Starting graceful shutdown")


def create_app(settings: Settings, db: Database | None = None) -> FastAPI:
    """
    Build the key-value app for the given settings.

    db: pre-opened Database (tests); default opens settings.db_path, creating
    the file if needed. Raises StorageError if the file cannot be opened.
    """
    if db is None:
        db = get_database(settings.db_path)

    app = FastAPI(
        title="ywkv",
        description="Single-table key-value store: GET /{key} to read, POST /{key} to write.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.kv_service = KeyValueService.from_settings(db, settings)

    app.add_middleware(GZipMiddleware)
    app.include_router(kv_router)

    @app.exception_handler(HTTPException)
    def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
        """Consistent JSON error response for HTTPException."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    return app
