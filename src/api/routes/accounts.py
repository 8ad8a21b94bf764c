"""
Account management API routes.

This module provides:
- POST /api/v1/accounts - Register a new account
- GET /api/v1/accounts - List accounts (paginated)
- GET /api/v1/accounts/{account_id} - Get account
- PUT /api/v1/accounts/{account_id} - Update account
- DELETE /api/v1/accounts/{account_id} - Soft delete account
- POST /api/v1/accounts/{account_id}/access-levels - Assign access levels
- GET /api/v1/accounts/{account_id}/access-levels - List account access levels
- DELETE /api/v1/accounts/{account_id}/access-levels/{access_level_id} - Remove access level
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status

from src.api.dependencies import AccountServiceDep
from src.schemas.access_level import AccessLevelResponse
from src.schemas.account import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    AccountUpdate,
    AssignAccessLevelsRequest,
)
from src.schemas.common import MessageResponse, PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    description="Register a new account together with its password credential",
)
async def create_account(
    account_data: AccountCreate,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """
    Register a new account.

    Raises:
        - 400 Bad Request: Invalid input or email already in use
    """
    return await account_service.create_account(account_data)


@router.get(
    "",
    response_model=AccountListResponse,
    summary="List accounts",
    description="List active accounts, newest first",
)
async def list_accounts(
    account_service: AccountServiceDep,
    pagination: PaginationParams = Depends(),
) -> AccountListResponse:
    """
    List accounts with pagination.

    Query parameters:
        - page: Page number (default: 1)
        - page_size: Items per page (default: 10, max: 100)
    """
    return await account_service.list_accounts(
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.get(
    "/{account_id}",
    response_model=AccountResponse,
    summary="Get account",
    description="Get an account with its current access levels",
)
async def get_account(
    account_id: uuid.UUID,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """
    Get account by ID.

    Raises:
        - 404 Not Found: Account does not exist or was deleted
    """
    return await account_service.get_account(account_id)


@router.put(
    "/{account_id}",
    response_model=AccountResponse,
    summary="Update account",
    description="Update profile fields; omitted or blank fields are left unchanged",
)
async def update_account(
    account_id: uuid.UUID,
    update_data: AccountUpdate,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """
    Update account profile.

    Raises:
        - 400 Bad Request: Email already used by another account
        - 404 Not Found: Account does not exist or was deleted
    """
    return await account_service.update_account(account_id, update_data)


@router.delete(
    "/{account_id}",
    response_model=MessageResponse,
    summary="Delete account",
    description="Soft delete an account",
)
async def delete_account(
    account_id: uuid.UUID,
    account_service: AccountServiceDep,
) -> MessageResponse:
    """
    Soft delete an account.

    Raises:
        - 404 Not Found: Account does not exist or was already deleted
    """
    await account_service.delete_account(account_id)
    return MessageResponse(message="Account deleted successfully")


@router.post(
    "/{account_id}/access-levels",
    response_model=MessageResponse,
    summary="Assign access levels",
    description="Assign access levels to an account (idempotent)",
)
async def assign_access_levels(
    account_id: uuid.UUID,
    assign_data: AssignAccessLevelsRequest,
    account_service: AccountServiceDep,
) -> MessageResponse:
    """
    Assign access levels to an account.

    Raises:
        - 404 Not Found: Account or one of the access levels does not exist
    """
    await account_service.assign_access_levels(account_id, assign_data.access_level_ids)
    return MessageResponse(message="Access levels assigned successfully")


@router.get(
    "/{account_id}/access-levels",
    response_model=list[AccessLevelResponse],
    summary="List account access levels",
    description="Get the access levels currently assigned to an account",
)
async def get_account_access_levels(
    account_id: uuid.UUID,
    account_service: AccountServiceDep,
) -> list[AccessLevelResponse]:
    """Get the active access levels of an account, ordered by name."""
    return await account_service.get_account_access_levels(account_id)


@router.delete(
    "/{account_id}/access-levels/{access_level_id}",
    response_model=MessageResponse,
    summary="Remove access level",
    description="Remove an access level from an account",
)
async def remove_access_level(
    account_id: uuid.UUID,
    access_level_id: int,
    account_service: AccountServiceDep,
) -> MessageResponse:
    """
    Remove an access level from an account.

    Raises:
        - 404 Not Found: The access level was never assigned to the account
    """
    await account_service.remove_access_level(account_id, access_level_id)
    return MessageResponse(message="Access level removed successfully")
