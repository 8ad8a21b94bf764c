"""
Authentication API routes.

This module provides:
- POST /api/v1/auth/login - Verify email and password
"""

import logging

from fastapi import APIRouter

from src.api.dependencies import AccountServiceDep
from src.schemas.account import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with email and password",
)
async def login(
    login_data: LoginRequest,
    account_service: AccountServiceDep,
) -> LoginResponse:
    """
    Authenticate an account.

    No token is issued; a successful response carries the account.

    Raises:
        - 401 Unauthorized: Invalid email or password
    """
    return await account_service.authenticate_account(login_data)
