"""
Pytest configuration and fixtures for User Access Service tests.

This module provides:
- In-memory SQLite database setup and teardown
- Database session fixtures
- Async HTTP client fixtures
- Account and access level fixtures
"""

# Set environment variables BEFORE importing anything from src
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FILE_ENABLED"] = "false"
# Cheap Argon2 parameters keep hashing fast in tests
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "8"
os.environ["ARGON2_PARALLELISM"] = "1"

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.core.database import create_session_factory, get_db
from src.core.security import hash_password
from src.main import app
from src.models import Base
from src.models.access_level import AccessLevel
from src.models.account import Account, Credential
from src.repositories.access_level_repository import AccessLevelRepository
from src.repositories.account_repository import AccountRepository

TEST_PASSWORD = "Secret123!"


# ============================================================================
# Database Fixtures
# ============================================================================
def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    Let the SQLite driver honour SAVEPOINT and foreign keys.

    The driver's own transaction handling is switched off and SQLAlchemy
    emits BEGIN itself, so begin_nested() produces real SAVEPOINTs.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh in-memory database for a single test.

    StaticPool keeps one connection alive so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    _enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a database session for a test.

    Nothing is committed; the database disappears with the engine.
    """
    async with session_factory() as session:
        yield session


# ============================================================================
# FastAPI Client Fixtures
# ============================================================================
@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async FastAPI test client bound to the test database.

    Each request gets its own session, committed on success and rolled
    back on error, like get_db.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.sessionmaker = session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.state.sessionmaker = None


# ============================================================================
# Data Fixtures
# ============================================================================
@pytest.fixture
def test_password() -> str:
    """Plain password of accounts built by account_factory."""
    return TEST_PASSWORD


@pytest.fixture
def account_factory(db_session: AsyncSession) -> Callable[..., Awaitable[Account]]:
    """
    Factory inserting accounts with a hashed password through AccountRepository.

    Usage:
        account = await account_factory(email="jane@example.com")
    """

    async def _create(
        email: str = "john.doe@example.com",
        password: str = TEST_PASSWORD,
        first_name: str = "John",
        last_name: str = "Doe",
    ) -> Account:
        account = Account(first_name=first_name, last_name=last_name, email=email)
        credential = Credential(password_hash=hash_password(password))
        return await AccountRepository(db_session).create(account, credential)

    return _create


@pytest_asyncio.fixture
async def test_account(account_factory: Callable[..., Awaitable[Account]]) -> Account:
    """An active account with password TEST_PASSWORD."""
    return await account_factory()


@pytest_asyncio.fixture
async def admin_level(db_session: AsyncSession) -> AccessLevel:
    """An "admin" access level."""
    return await AccessLevelRepository(db_session).create(
        AccessLevel(name="admin", description="Full administrative access")
    )


@pytest_asyncio.fixture
async def viewer_level(db_session: AsyncSession) -> AccessLevel:
    """A "viewer" access level without description."""
    return await AccessLevelRepository(db_session).create(AccessLevel(name="viewer"))
