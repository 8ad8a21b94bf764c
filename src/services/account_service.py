"""
Account management service.

This module provides:
- Account registration (account + credential in one transaction)
- Account retrieval, update, soft deletion and paginated listing
- Password authentication
- Access level assignment, removal and lookup for an account
"""

import logging
import uuid

from src.core.security import MIN_PASSWORD_LENGTH, hash_password, verify_password
from src.exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
)
from src.models.access_level import AccessLevel
from src.models.account import Account, Credential
from src.repositories.ports import AccessLevelRepositoryPort, AccountRepositoryPort
from src.schemas.access_level import AccessLevelResponse
from src.schemas.account import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    AccountUpdate,
    LoginRequest,
    LoginResponse,
)
from src.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AccountService:
    """
    Service class for account operations.

    This service handles:
    - Input validation (names, email shape, password length)
    - Duplicate email checks among active accounts
    - Password hashing and verification
    - Composition of repository results into response schemas

    Repositories are injected, so any implementation of the repository
    protocols (SQLAlchemy, in-memory, mocks) can be used.
    """

    def __init__(
        self,
        account_repo: AccountRepositoryPort,
        access_level_repo: AccessLevelRepositoryPort,
    ):
        """
        Initialize AccountService.

        Args:
            account_repo: Store for accounts and credentials
            access_level_repo: Store for access levels and assignments
        """
        self.account_repo = account_repo
        self.access_level_repo = access_level_repo

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _validate_email(email: str | None) -> None:
        if _is_blank(email):
            raise InvalidInputError("email", "Email is required")
        if "@" not in email:
            raise InvalidInputError("email", "Email must contain '@'")

    @staticmethod
    def _validate_create_request(request: AccountCreate) -> None:
        """
        Validate registration input.

        Raises:
            InvalidInputError: On the first failing field
        """
        if _is_blank(request.first_name):
            raise InvalidInputError("first_name", "First name is required")
        if _is_blank(request.last_name):
            raise InvalidInputError("last_name", "Last name is required")
        AccountService._validate_email(request.email)
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                "password",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )

    @staticmethod
    def _to_access_level_responses(
        access_levels: list[AccessLevel],
    ) -> list[AccessLevelResponse]:
        return [AccessLevelResponse.model_validate(level) for level in access_levels]

    async def _to_response(self, account: Account) -> AccountResponse:
        """Build the account representation with its current access levels."""
        access_levels = await self.access_level_repo.get_account_access_levels(account.id)
        return AccountResponse(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            phone_number=account.phone_number,
            access_levels=self._to_access_level_responses(access_levels),
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    # =========================================================================
    # Account CRUD
    # =========================================================================

    async def create_account(self, request: AccountCreate) -> AccountResponse:
        """
        Register a new account with its password credential.

        Steps:
        1. Validate input
        2. Reject an email already used by an active account
        3. Hash the password with Argon2id
        4. Insert account and credential atomically

        Args:
            request: Registration data

        Returns:
            AccountResponse (no access levels yet)

        Raises:
            InvalidInputError: If a field is blank/malformed or password too short
            AlreadyExistsError: If the email belongs to an active account
            PersistenceError: If the insert fails (nothing is persisted)
        """
        self._validate_create_request(request)
        email = request.email.strip()

        if await self.account_repo.email_exists(email):
            logger.warning(f"Registration rejected: email {email} already in use")
            raise AlreadyExistsError("Account with this email")

        account = Account(
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            email=email,
            phone_number=None if _is_blank(request.phone_number) else request.phone_number,
        )
        credential = Credential(password_hash=hash_password(request.password))

        account = await self.account_repo.create(account, credential)
        logger.info(f"Account {account.id} created")

        return AccountResponse(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            phone_number=account.phone_number,
            access_levels=[],
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    async def get_account(self, account_id: uuid.UUID) -> AccountResponse:
        """
        Get an account with its current access levels.

        Raises:
            NotFoundError: If the account does not exist or was deleted
        """
        account = await self.account_repo.get_by_id(account_id)
        return await self._to_response(account)

    async def update_account(
        self, account_id: uuid.UUID, request: AccountUpdate
    ) -> AccountResponse:
        """
        Update account profile fields.

        Every provided, non-blank field overwrites the stored value; missing
        or blank fields are left unchanged. A new email is checked against
        other active accounts (the account's own email does not conflict).

        Args:
            account_id: Account to update
            request: Fields to change

        Returns:
            Updated AccountResponse with access levels

        Raises:
            NotFoundError: If the account does not exist or was deleted
            InvalidInputError: If the new email is malformed
            AlreadyExistsError: If the new email belongs to another active account
        """
        account = await self.account_repo.get_by_id(account_id)

        if not _is_blank(request.first_name):
            account.first_name = request.first_name.strip()
        if not _is_blank(request.last_name):
            account.last_name = request.last_name.strip()
        if not _is_blank(request.email):
            email = request.email.strip()
            self._validate_email(email)
            if await self.account_repo.email_exists(email, exclude_account_id=account_id):
                logger.warning(
                    f"Update of account {account_id} rejected: email {email} already in use"
                )
                raise AlreadyExistsError("Account with this email")
            account.email = email
        if not _is_blank(request.phone_number):
            account.phone_number = request.phone_number

        account = await self.account_repo.update(account)
        logger.info(f"Account {account_id} updated")

        return await self._to_response(account)

    async def delete_account(self, account_id: uuid.UUID) -> None:
        """
        Soft delete an account.

        Raises:
            NotFoundError: If the account does not exist or was already deleted
        """
        await self.account_repo.delete(account_id)
        logger.info(f"Account {account_id} deleted")

    async def list_accounts(
        self, page: int | None = None, page_size: int | None = None
    ) -> AccountListResponse:
        """
        List active accounts, newest first.

        Pagination is normalized rather than rejected: a page below 1 becomes
        1, and a page size outside [1, 100] (or unset) becomes 10.

        Args:
            page: 1-indexed page number
            page_size: Items per page

        Returns:
            AccountListResponse with the page, total active count and the
            normalized page/page_size
        """
        if page is None or page < 1:
            page = 1
        if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
            page_size = DEFAULT_PAGE_SIZE

        offset = (page - 1) * page_size
        accounts, total = await self.account_repo.list_all(limit=page_size, offset=offset)

        return AccountListResponse(
            accounts=[await self._to_response(account) for account in accounts],
            total=total,
            page=page,
            page_size=page_size,
        )

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate_account(self, request: LoginRequest) -> LoginResponse:
        """
        Verify an email/password pair.

        Unknown email, missing credential and wrong password all produce the
        same error, so a caller cannot probe which emails are registered.
        Storage failures are not folded into that error: a PersistenceError
        propagates unchanged so an outage is never reported as bad
        credentials.

        Args:
            request: Login credentials

        Returns:
            LoginResponse with the account representation

        Raises:
            InvalidCredentialsError: If authentication fails for any reason
            PersistenceError: If the store itself fails
        """
        try:
            account = await self.account_repo.get_by_email(request.email)
            credential = await self.account_repo.get_credential(account.id)
        except NotFoundError:
            logger.warning("Login failed: no active account or credential for email")
            raise InvalidCredentialsError() from None

        if not verify_password(request.password, credential.password_hash):
            logger.warning(f"Login failed: wrong password for account {account.id}")
            raise InvalidCredentialsError()

        logger.info(f"Account {account.id} authenticated")
        return LoginResponse(account=await self._to_response(account))

    # =========================================================================
    # Access Levels
    # =========================================================================

    async def assign_access_levels(
        self, account_id: uuid.UUID, access_level_ids: list[int]
    ) -> None:
        """
        Assign access levels to an account, in the given order.

        Each assignment is idempotent and committed on its own, so the
        first unknown access level aborts the remaining ones while the
        assignments already made stay committed.

        Args:
            account_id: Target account
            access_level_ids: Access levels to assign

        Raises:
            NotFoundError: If the account or one of the access levels is missing
        """
        await self.account_repo.get_by_id(account_id)

        for access_level_id in access_level_ids:
            try:
                await self.access_level_repo.get_by_id(access_level_id)
            except NotFoundError:
                logger.warning(
                    f"Assignment to account {account_id} aborted: "
                    f"access level {access_level_id} not found"
                )
                raise NotFoundError(
                    "Access level",
                    message=f"Access level {access_level_id} not found",
                ) from None

            await self.access_level_repo.assign_to_account(account_id, access_level_id)
            await self.access_level_repo.commit()

        logger.info(f"Access levels {access_level_ids} assigned to account {account_id}")

    async def remove_access_level(
        self, account_id: uuid.UUID, access_level_id: int
    ) -> None:
        """
        Remove an access level from an account.

        Raises:
            NotFoundError: If the access level was never assigned to the account
        """
        await self.access_level_repo.remove_from_account(account_id, access_level_id)
        logger.info(f"Access level {access_level_id} removed from account {account_id}")

    async def get_account_access_levels(
        self, account_id: uuid.UUID
    ) -> list[AccessLevelResponse]:
        """
        Get the active access levels of an account, ordered by name.

        Returns an empty list for an account without roles.
        """
        access_levels = await self.access_level_repo.get_account_access_levels(account_id)
        return self._to_access_level_responses(access_levels)
