"""
Account repository for account and credential database operations.

This module provides database operations for the Account model,
including the transactional account + credential creation, email lookups
used for authentication and uniqueness checks, and paginated listing.
"""

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import NotFoundError
from src.models.account import Account, Credential
from src.models.mixins import utc_now
from src.repositories.base import BaseRepository, wrap_persistence_errors


class AccountRepository(BaseRepository[Account]):
    """
    Repository for Account model operations.

    Extends BaseRepository with account-specific queries:
    - Atomic creation of an account with its credential
    - Email lookups (for authentication and uniqueness checks)
    - Paginated listing with total count
    - Credential retrieval (for password verification)
    """

    resource_name = "Account"

    def __init__(self, session: AsyncSession):
        """
        Initialize AccountRepository.

        Args:
            session: Async database session
        """
        super().__init__(Account, session)

    @wrap_persistence_errors("create account")
    async def create(self, account: Account, credential: Credential) -> Account:
        """
        Insert an account and its credential atomically.

        Both inserts run inside a SAVEPOINT: if the credential insert fails,
        the account insert is rolled back too and no partial state remains in
        the session. Identifiers and timestamps are assigned to the given
        objects in place.

        Args:
            account: Account without an id, all required fields populated
            credential: Credential carrying a pre-computed password hash

        Returns:
            The persisted account

        Raises:
            PersistenceError: On constraint violation or connection failure

        Example:
            account = Account(first_name="John", last_name="Doe", email="john@example.com")
            credential = Credential(password_hash=hash_password("secret123"))
            await account_repo.create(account, credential)
            assert credential.account_id == account.id
        """
        async with self.session.begin_nested():
            now = utc_now()
            account.id = uuid.uuid4()
            account.created_at = now
            account.updated_at = now
            self.session.add(account)
            await self.session.flush()

            credential.id = uuid.uuid4()
            credential.account_id = account.id
            credential.created_at = now
            credential.updated_at = now
            self.session.add(credential)
            await self.session.flush()

        return account

    @wrap_persistence_errors("get account")
    async def get_by_id(self, account_id: uuid.UUID) -> Account:
        """
        Get active account by ID.

        Args:
            account_id: UUID of the account

        Returns:
            Account instance

        Raises:
            NotFoundError: If the account does not exist or is soft-deleted
        """
        return await super().get_by_id(account_id)

    @wrap_persistence_errors("get account by email")
    async def get_by_email(self, email: str) -> Account:
        """
        Get active account by email address.

        Args:
            email: Email address to search for

        Returns:
            Account instance

        Raises:
            NotFoundError: If no active account uses this email

        Example:
            account = await account_repo.get_by_email("john@example.com")
        """
        account = await self._first_active(select(Account).where(Account.email == email))
        if account is None:
            raise NotFoundError(self.resource_name)
        return account

    @wrap_persistence_errors("check email")
    async def email_exists(
        self, email: str, exclude_account_id: uuid.UUID | None = None
    ) -> bool:
        """
        Check if email is already in use by another active account.

        Args:
            email: Email address to check
            exclude_account_id: Account ID to exclude from check (for updates)

        Returns:
            True if email exists, False otherwise

        Example:
            # During profile update
            if await account_repo.email_exists(new_email, exclude_account_id=account.id):
                raise AlreadyExistsError("Account with this email")
        """
        query = select(Account.id).where(Account.email == email)
        query = self._apply_soft_delete_filter(query)

        if exclude_account_id:
            query = query.where(Account.id != exclude_account_id)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    @wrap_persistence_errors("update account")
    async def update(self, account: Account) -> Account:
        """
        Persist profile fields of an existing account.

        Replaces first_name, last_name, email and phone_number with the
        values carried by the given instance and bumps updated_at. Credential
        and access level data are not touched.

        Args:
            account: Account carrying its id and the desired field values

        Returns:
            The updated account

        Raises:
            NotFoundError: If no active account has this id
        """
        account.updated_at = utc_now()
        stmt = (
            update(Account)
            .where(Account.id == account.id, Account.deleted_at.is_(None))
            .values(
                first_name=account.first_name,
                last_name=account.last_name,
                email=account.email,
                phone_number=account.phone_number,
                updated_at=account.updated_at,
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(self.resource_name)
        return account

    @wrap_persistence_errors("delete account")
    async def delete(self, account_id: uuid.UUID) -> None:
        """
        Soft delete an account.

        The row stays in the table with deleted_at set and disappears from
        every query of this repository.

        Args:
            account_id: UUID of the account

        Raises:
            NotFoundError: If the account does not exist or is already deleted
        """
        await self.soft_delete_by_id(account_id)

    @wrap_persistence_errors("list accounts")
    async def list_all(self, limit: int, offset: int) -> tuple[list[Account], int]:
        """
        Get a page of active accounts and the total active count.

        The total is computed independently of the page window, so it
        reflects the full result set.

        Args:
            limit: Maximum number of accounts to return
            offset: Number of accounts to skip

        Returns:
            Tuple of (accounts newest first, total count)

        Example:
            accounts, total = await account_repo.list_all(limit=10, offset=20)
        """
        total = await self.count()

        query = select(Account)
        query = self._apply_soft_delete_filter(query)
        query = query.order_by(Account.created_at.desc()).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    @wrap_persistence_errors("get credential")
    async def get_credential(self, account_id: uuid.UUID) -> Credential:
        """
        Get the credential for an account.

        Args:
            account_id: UUID of the owning account

        Returns:
            Credential instance

        Raises:
            NotFoundError: If the account has no active credential
        """
        query = select(Credential).where(Credential.account_id == account_id)
        query = self._apply_soft_delete_filter(query, Credential)

        result = await self.session.execute(query)
        credential = result.scalars().first()
        if credential is None:
            raise NotFoundError("Credential")
        return credential
