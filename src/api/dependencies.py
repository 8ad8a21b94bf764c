"""
FastAPI dependencies for service construction.

This module provides:
- Repository construction over the request-scoped session
- Service construction with injected repositories
- Annotated aliases used in route signatures
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories import AccessLevelRepository, AccountRepository
from src.services import AccessLevelService, AccountService


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    """
    Dependency to get AccountService instance.

    Both repositories share the request's session. It is committed when
    the request succeeds; access level assignments also commit one by one.

    Args:
        db: Database session

    Returns:
        AccountService instance

    Usage:
        @app.post("/api/v1/accounts")
        async def create_account(
            account_service: AccountService = Depends(get_account_service)
        ):
            pass
    """
    return AccountService(AccountRepository(db), AccessLevelRepository(db))


def get_access_level_service(
    db: AsyncSession = Depends(get_db),
) -> AccessLevelService:
    """
    Dependency to get AccessLevelService instance.

    Args:
        db: Database session

    Returns:
        AccessLevelService instance
    """
    return AccessLevelService(AccessLevelRepository(db))


# Type aliases for dependency injection
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
AccessLevelServiceDep = Annotated[AccessLevelService, Depends(get_access_level_service)]
