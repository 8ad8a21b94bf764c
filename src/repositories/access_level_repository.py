"""
Access level repository for role definitions and role assignments.

This module provides database operations for the AccessLevel model and the
AccountAccessLevel junction table:
- Role definition lookups and listing
- Idempotent assignment of roles to accounts (native upsert)
- Soft removal of assignments
- Active role lookup for an account
"""

import uuid
from typing import Any

from sqlalchemy import func, literal, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import NotFoundError, PersistenceError
from src.models.access_level import AccessLevel, AccountAccessLevel
from src.models.mixins import utc_now
from src.repositories.base import BaseRepository, wrap_persistence_errors

# Dialects offering INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class AccessLevelRepository(BaseRepository[AccessLevel]):
    """
    Repository for AccessLevel model operations.

    Extends BaseRepository with role-specific queries:
    - Role name lookups
    - Role assignment and removal
    - Account role retrieval
    """

    resource_name = "Access level"

    def __init__(self, session: AsyncSession):
        """
        Initialize AccessLevelRepository.

        Args:
            session: Async database session
        """
        super().__init__(AccessLevel, session)

    @wrap_persistence_errors("create access level")
    async def create(self, access_level: AccessLevel) -> AccessLevel:
        """
        Insert a new access level with fresh timestamps.

        Duplicate names are not checked here; AccessLevelService does that
        before calling.

        Args:
            access_level: AccessLevel without an id

        Returns:
            Persisted access level with its generated id
        """
        now = utc_now()
        access_level.created_at = now
        access_level.updated_at = now
        return await self.add(access_level)

    @wrap_persistence_errors("get access level")
    async def get_by_id(self, access_level_id: int) -> AccessLevel:
        """
        Get active access level by ID.

        Raises:
            NotFoundError: If not found or soft-deleted
        """
        return await super().get_by_id(access_level_id)

    @wrap_persistence_errors("get access level by name")
    async def get_by_name(self, name: str) -> AccessLevel:
        """
        Get active access level by name.

        Args:
            name: Access level name to search for (e.g., "admin")

        Returns:
            AccessLevel instance

        Raises:
            NotFoundError: If not found or soft-deleted

        Example:
            admin = await access_level_repo.get_by_name("admin")
        """
        query = select(AccessLevel).where(AccessLevel.name == name)
        access_level = await self._first_active(query)
        if access_level is None:
            raise NotFoundError(self.resource_name)
        return access_level

    @wrap_persistence_errors("list access levels")
    async def list_all(self) -> list[AccessLevel]:
        """
        Get all active access levels ordered by name.

        Returns:
            List of AccessLevel instances
        """
        query = self._apply_soft_delete_filter(select(AccessLevel))
        result = await self.session.execute(query.order_by(AccessLevel.name.asc()))
        return list(result.scalars().all())

    def _upsert_insert(self) -> Any:
        """
        Return the dialect-specific insert construct supporting ON CONFLICT.

        Raises:
            PersistenceError: If the bound database has no native upsert
        """
        dialect = self.session.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect]
        except KeyError:
            raise PersistenceError(
                f"Upsert is not supported for the '{dialect}' database"
            ) from None

    @wrap_persistence_errors("assign access level")
    async def assign_to_account(
        self, account_id: uuid.UUID, access_level_id: int
    ) -> None:
        """
        Assign an access level to an account.

        Runs a single INSERT ... ON CONFLICT (account_id, access_level_id)
        DO UPDATE statement. A new pair gets a fresh row; an existing row
        (active or removed) is revived: deleted_at is cleared and updated_at
        refreshed. Calling this twice leaves exactly one active row.

        Args:
            account_id: UUID of the account
            access_level_id: ID of the access level

        Example:
            await access_level_repo.assign_to_account(account.id, admin.id)
        """
        now = utc_now()
        table = AccountAccessLevel.__table__
        insert = self._upsert_insert()

        stmt = insert(table).values(
            account_id=account_id,
            access_level_id=access_level_id,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.account_id, table.c.access_level_id],
            set_={"deleted_at": None, "updated_at": now},
        )
        await self.session.execute(stmt)

    @wrap_persistence_errors("remove access level")
    async def remove_from_account(
        self, account_id: uuid.UUID, access_level_id: int
    ) -> None:
        """
        Soft delete the assignment of an access level to an account.

        An already-removed assignment keeps its original removal time and
        the call succeeds; only a pair that was never assigned is reported
        as missing.

        Args:
            account_id: UUID of the account
            access_level_id: ID of the access level

        Raises:
            NotFoundError: If no assignment row exists for the pair
        """
        removed_at = literal(utc_now(), type_=AccountAccessLevel.__table__.c.deleted_at.type)
        stmt = (
            update(AccountAccessLevel)
            .where(
                AccountAccessLevel.account_id == account_id,
                AccountAccessLevel.access_level_id == access_level_id,
            )
            .values(deleted_at=func.coalesce(AccountAccessLevel.deleted_at, removed_at))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("Access level assignment")

    @wrap_persistence_errors("get account access levels")
    async def get_account_access_levels(
        self, account_id: uuid.UUID
    ) -> list[AccessLevel]:
        """
        Get the active access levels of an account.

        Joins the junction table, keeping only active assignments of active
        access levels.

        Args:
            account_id: UUID of the account

        Returns:
            Access levels ordered by name (empty list if none)
        """
        query = select(AccessLevel).join(
            AccountAccessLevel,
            AccountAccessLevel.access_level_id == AccessLevel.id,
        )
        query = query.where(AccountAccessLevel.account_id == account_id)
        query = self._apply_soft_delete_filter(query, AccountAccessLevel)
        query = self._apply_soft_delete_filter(query)

        result = await self.session.execute(query.order_by(AccessLevel.name.asc()))
        return list(result.scalars().all())
