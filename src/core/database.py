"""
Database connection and session management.

This module provides async database session management using SQLAlchemy 2.0.
PostgreSQL with the asyncpg driver is the production target; any SQLAlchemy
async URL (e.g. sqlite+aiosqlite) is accepted.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool

from src.core.config import settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Database Engine Configuration
# -----------------------------------------------------------------------------


def create_database_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create async database engine with connection pooling.

    Args:
        database_url: Database URL. If None, uses settings.database_url

    Returns:
        Configured AsyncEngine instance

    Connection Pool Configuration (PostgreSQL):
        - pool_size: Number of permanent connections (default: 5)
        - max_overflow: Additional connections under load (default: 10)
        - pool_pre_ping: Test connection before use (default: True)
        - pool_recycle: Recycle connections after N seconds (default: 3600)
    """
    url = database_url or settings.database_url

    logger.info("Initializing database engine...")

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=settings.debug)
        logger.info("Database engine created for SQLite")
        return engine

    engine_kwargs: dict[str, Any] = {
        "echo": settings.debug,  # Log SQL queries in debug mode
        "echo_pool": settings.debug,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": settings.db_pool_recycle,
        "poolclass": AsyncAdaptedQueuePool,
    }
    if "asyncpg" in url:
        engine_kwargs["connect_args"] = {
            "server_settings": {
                "application_name": f"{settings.app_name} - {settings.environment}",
            },
        }

    engine = create_async_engine(url, **engine_kwargs)

    logger.info(
        f"Database engine created: pool_size={settings.db_pool_size}, "
        f"max_overflow={settings.db_max_overflow}"
    )

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the session factory used for request-scoped sessions.

    Sessions neither expire objects on commit nor autoflush, so services
    control exactly when pending changes reach the database.

    Args:
        engine: The AsyncEngine sessions bind to

    Returns:
        async_sessionmaker producing AsyncSession instances
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# -----------------------------------------------------------------------------
# Session Dependency
# -----------------------------------------------------------------------------


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one database session per request.

    The session is committed when the request handler returns and rolled
    back when it raises; the exception is re-raised for the exception
    handlers.

    Args:
        request: Incoming request (its app.state holds the sessionmaker)

    Yields:
        AsyncSession instance

    Usage:
        @router.get("/accounts/{account_id}")
        async def get_account(db: AsyncSession = Depends(get_db)):
            ...
    """
    sessionmaker: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# -----------------------------------------------------------------------------
# Lifecycle Management
# -----------------------------------------------------------------------------


async def check_database_connection(
    sessionmaker: async_sessionmaker[AsyncSession] | None,
) -> bool:
    """
    Check if the database answers a trivial query.

    Args:
        sessionmaker: Session factory from app.state (None before startup)

    Returns:
        True if connection is healthy, False otherwise
    """
    if sessionmaker is None:
        return False

    try:
        async with sessionmaker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_database_connection(engine: AsyncEngine) -> None:
    """
    Close database engine and dispose of connection pool.

    Should be called on application shutdown to gracefully close
    all database connections.

    Args:
        engine: The AsyncEngine to dispose
    """
    try:
        await engine.dispose()
        logger.info("Database engine disposed successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error disposing database engine: {e}")
