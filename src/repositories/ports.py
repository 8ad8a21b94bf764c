"""
Repository interfaces consumed by the service layer.

Services depend on these protocols rather than on the SQLAlchemy
implementations, so an in-memory or mocked store can be substituted
without touching service code.
"""

import uuid
from typing import Protocol

from src.models.access_level import AccessLevel
from src.models.account import Account, Credential


class AccountRepositoryPort(Protocol):
    """Repository interface for Account and Credential records."""

    async def create(self, account: Account, credential: Credential) -> Account:
        """
        Atomically insert an account together with its credential.

        Identifiers and timestamps are assigned to both objects in place.

        Raises:
            PersistenceError: If either insert fails (nothing is persisted)
        """
        ...

    async def get_by_id(self, account_id: uuid.UUID) -> Account:
        """
        Retrieve an active account by ID.

        Raises:
            NotFoundError: If no active account has this ID
        """
        ...

    async def get_by_email(self, email: str) -> Account:
        """
        Retrieve an active account by email.

        Raises:
            NotFoundError: If no active account has this email
        """
        ...

    async def email_exists(
        self, email: str, exclude_account_id: uuid.UUID | None = None
    ) -> bool:
        """Check whether an active account (other than the excluded one) uses the email."""
        ...

    async def update(self, account: Account) -> Account:
        """
        Persist name, email and phone changes and bump updated_at.

        Raises:
            NotFoundError: If the account is missing or soft-deleted
        """
        ...

    async def delete(self, account_id: uuid.UUID) -> None:
        """
        Soft delete an account.

        Raises:
            NotFoundError: If the account is missing or already deleted
        """
        ...

    async def list_all(self, limit: int, offset: int) -> tuple[list[Account], int]:
        """
        Page of active accounts (newest first) and the total active count.
        """
        ...

    async def get_credential(self, account_id: uuid.UUID) -> Credential:
        """
        Retrieve the credential of an account.

        Raises:
            NotFoundError: If the account has no credential
        """
        ...


class AccessLevelRepositoryPort(Protocol):
    """Repository interface for AccessLevel records and assignments."""

    async def create(self, access_level: AccessLevel) -> AccessLevel:
        """Insert a new access level. Duplicate names are checked by the caller."""
        ...

    async def get_by_id(self, access_level_id: int) -> AccessLevel:
        """
        Retrieve an active access level by ID.

        Raises:
            NotFoundError: If not found
        """
        ...

    async def get_by_name(self, name: str) -> AccessLevel:
        """
        Retrieve an active access level by name.

        Raises:
            NotFoundError: If not found
        """
        ...

    async def list_all(self) -> list[AccessLevel]:
        """All active access levels ordered by name."""
        ...

    async def assign_to_account(
        self, account_id: uuid.UUID, access_level_id: int
    ) -> None:
        """
        Assign an access level to an account.

        Idempotent: re-assigning revives a previously removed assignment
        instead of inserting a second row.
        """
        ...

    async def remove_from_account(
        self, account_id: uuid.UUID, access_level_id: int
    ) -> None:
        """
        Soft delete an assignment.

        Raises:
            NotFoundError: If the pair was never assigned
        """
        ...

    async def get_account_access_levels(
        self, account_id: uuid.UUID
    ) -> list[AccessLevel]:
        """Active access levels of an account ordered by name (may be empty)."""
        ...

    async def commit(self) -> None:
        """
        Make the writes issued so far durable.

        Raises:
            PersistenceError: If the commit fails
        """
        ...
