"""
SheetStore Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐                      │
    │  │  Req ID  │→│ Logging  │→│ CORS │                      │
    │  └──────────┘ └──────────┘ └──────┘                      │
    │                                                          │
    │  Routes:                                                 │
    │  /api/setCollection  /api/addSheet   /api/getSheets      │
    │  /api/getTable       /api/saveTable  /api/deleteSheet    │
    │  /                   /health                             │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ValidationError→400 │ NotFoundError→404 │ Storage→500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the store within DB_CONNECT_TIMEOUT; on failure the lifespan
       raises and uvicorn exits
    3. Create missing tables (DB_CREATE_TABLES)

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import create_tables, dispose_engine, verify_connection
from app.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import collection, health, sheets, tables

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    A store that cannot be reached at startup is fatal. There is no retry:
    the exception ends the lifespan and uvicorn exits with a non-zero code.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("SheetStore Backend starting up...")

    try:
        await verify_connection(timeout=settings.db_connect_timeout)
    except Exception as e:
        logger.critical(
            "Could not connect to the database within %.1fs: %s",
            settings.db_connect_timeout,
            str(e) or type(e).__name__,
        )
        await dispose_engine()
        raise StorageError(
            message="Database connection failed at startup",
            context={"error_type": type(e).__name__},
        ) from e
    logger.info("Connected to the database")

    if settings.db_create_tables:
        await create_tables()
        logger.info("Sheet tables ready")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("SheetStore Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError        → 400 Bad Request
        RequestValidationError → 422 Unprocessable Entity (malformed body)
        NotFoundError          → 404 Not Found
        StorageError           → 500 Internal Server Error (generic message)
        Exception              → 500 Internal Server Error (unexpected errors)

    Every error body carries `success: false` so clients can treat error
    and soft-failure responses the same way.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed request (e.g. non-integer rows); FastAPI's error list goes in details."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %d error(s)", rid, len(exc.errors()))
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": "request_validation_error",
                "message": "Request body or parameters are malformed",
                "details": {"errors": jsonable_encoder(exc.errors())},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Storage failure; the raw error is only included when exposed."""
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        content = {
            "success": False,
            "error": "storage_error",
            "message": exc.message,
            "request_id": rid,
        }
        if exc.expose:
            content["details"] = {"error": exc.context.get("error")}
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="SheetStore API",
        description=(
            "CRUD API for named spreadsheet sheets: a registry of sheet names "
            "and one saved grid per sheet."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,  # active_collection cookie
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(collection.router)
    app.include_router(sheets.router)
    app.include_router(tables.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
