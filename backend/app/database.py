"""
SheetStore Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction Boundary:
    One session per request, one transaction per session. Every storage call a
    handler makes (e.g. deleteSheet's metadata update AND table deletion)
    commits together when the handler returns, or rolls back together when
    it raises.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
    SQLite URLs skip these options and use SQLAlchemy's default pool.
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.exceptions import StorageError

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Pool and driver options for the configured backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    if settings.database_url.startswith("postgresql+asyncpg"):
        # asyncpg's own connection-establishment timeout (seconds)
        options["connect_args"] = {"timeout": settings.db_connect_timeout}
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic and `create_tables()` both read.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction (a failed commit is rolled back
           and raised as StorageError)
        4. On error: rolls back the transaction (discards all of the
           request's writes) and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/getSheets")
        async def get_sheets(db: AsyncSession = Depends(get_db_session)):
            return await sheet_service.get_sheets(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        try:
            await commit_or_raise(session)
        finally:
            await session.close()


async def commit_or_raise(
    session: AsyncSession,
    message: str = "Error committing changes",
    expose: bool = False,
) -> None:
    """
    Commit the session, turning a failed commit into StorageError.

    The transaction is rolled back first, so none of its writes persist.
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        logger.error("Commit failed: %s", str(e), exc_info=True)
        await session.rollback()
        raise StorageError(message=message, context={"error": str(e)}, expose=expose) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def verify_connection(timeout: float) -> None:
    """
    Open one connection and run SELECT 1, giving up after `timeout` seconds.

    Raises:
        asyncio.TimeoutError: The store did not answer in time.
        sqlalchemy.exc.SQLAlchemyError / OSError: The connection was refused.
    """
    async def _ping() -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    await asyncio.wait_for(_ping(), timeout=timeout)


async def create_tables() -> None:
    """Create any missing tables registered on Base.metadata."""
    # Registers SheetMetadata and SheetTable on Base.metadata
    from app.models import sheet  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
