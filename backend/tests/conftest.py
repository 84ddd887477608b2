"""
SheetStore Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite +
       StaticPool, so all sessions share the one connection). The API client
       swaps get_db_session for a session bound to that database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        Fresh in-memory database with tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       One AsyncSession, for service-level tests
    ├── mock_db_session:  AsyncMock session, for storage-failure tests
    ├── test_app:         FastAPI app whose sessions use db_engine
    └── test_client:      HTTPX AsyncClient talking to test_app
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, commit_or_raise, get_db_session
from app.main import create_app
from app.models import sheet  # noqa: F401  (registers tables on Base.metadata)


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")
        with pytest.raises(StorageError):
            await sheet_service.get_sheets(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_app(session_factory):
    """App instance whose get_db_session commits/rolls back on the test database."""
    app = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await commit_or_raise(session)

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Cookies persist across requests on one client, like a browser session.
    The lifespan is not run, so no real database connection is attempted.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
