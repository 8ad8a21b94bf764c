"""
Base repository with generic CRUD operations.

This module provides a generic repository pattern for database operations.
All specific repositories should inherit from BaseRepository.

Type Parameters:
    ModelType: The SQLAlchemy model class (e.g., Account, AccessLevel)
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, ParamSpec, TypeVar

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import NotFoundError, PersistenceError
from src.models.base import Base
from src.models.mixins import utc_now

logger = logging.getLogger(__name__)

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

P = ParamSpec("P")
R = TypeVar("R")


def wrap_persistence_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator translating SQLAlchemy failures into PersistenceError.

    Application exceptions (NotFoundError, ...) raised by the wrapped method
    pass through untouched; only storage-engine errors are wrapped, with the
    original exception chained.

    Args:
        operation: Short description used in the error message,
                   e.g. "create account"

    Example:
        @wrap_persistence_errors("get account")
        async def get_by_id(self, id: uuid.UUID) -> Account:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Database error during '{operation}': {e}")
                raise PersistenceError(
                    f"Failed to {operation}",
                    details={"operation": operation},
                ) from e

        return wrapper

    return decorator


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository for database operations.

    Provides common CRUD operations that work with any SQLAlchemy model.
    Automatically handles soft deletes by filtering out deleted records.

    Type Parameters:
        ModelType: The SQLAlchemy model class

    Usage:
        class AccountRepository(BaseRepository[Account]):
            resource_name = "Account"

            def __init__(self, session: AsyncSession):
                super().__init__(Account, session)
    """

    #: Human readable name used in NotFoundError messages
    resource_name: str = "Resource"

    def __init__(self, model: type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def _apply_soft_delete_filter(
        self, query: Select[Any], model: type[Base] | None = None
    ) -> Select[Any]:
        """
        Apply soft delete filter to query if model supports it.

        Every read in the repository layer goes through this method so
        soft-deleted rows never leak out.

        Args:
            query: SQLAlchemy select statement
            model: Model whose deleted_at is checked (defaults to self.model)

        Returns:
            Query with soft delete filter applied
        """
        model = model or self.model
        if hasattr(model, "deleted_at"):
            query = query.where(model.deleted_at.is_(None))
        return query

    async def _first_active(self, query: Select[Any]) -> ModelType | None:
        """
        Execute a select with the soft delete filter and return one row.

        Args:
            query: SQLAlchemy select statement over self.model

        Returns:
            Model instance or None
        """
        query = self._apply_soft_delete_filter(query)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def add(self, instance: ModelType) -> ModelType:
        """
        Persist a model instance.

        Args:
            instance: Model instance to persist

        Returns:
            Persisted model instance (with ID and timestamps populated)
        """
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def find_by_id(self, id: Any) -> ModelType | None:
        """
        Get a record by primary key, or None.

        Automatically filters out soft-deleted records.

        Args:
            id: Primary key of the record

        Returns:
            Model instance or None if not found
        """
        query = select(self.model).where(self.model.id == id)
        return await self._first_active(query)

    async def get_by_id(self, id: Any) -> ModelType:
        """
        Get a record by primary key.

        Automatically filters out soft-deleted records.

        Args:
            id: Primary key of the record

        Returns:
            Model instance

        Raises:
            NotFoundError: If no active record has this id
        """
        instance = await self.find_by_id(id)
        if instance is None:
            raise NotFoundError(self.resource_name)
        return instance

    async def count(self) -> int:
        """
        Count active records.

        Returns:
            Total count of records that are not soft-deleted
        """
        query = select(func.count()).select_from(self.model)
        query = self._apply_soft_delete_filter(query)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def soft_delete_by_id(self, id: Any) -> None:
        """
        Soft delete an active record (set deleted_at timestamp).

        Runs a single UPDATE restricted to active rows, so deleting an
        already-deleted record counts as "not found".

        Args:
            id: Primary key of the record

        Raises:
            NotFoundError: If no active record has this id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id, self.model.deleted_at.is_(None))
            .values(deleted_at=utc_now())
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(self.resource_name)

    @wrap_persistence_errors("commit")
    async def commit(self) -> None:
        """
        Commit the work done so far on the shared session.

        Later failures in the same request can no longer roll back what
        was committed here.

        Raises:
            PersistenceError: If the commit fails
        """
        await self.session.commit()
