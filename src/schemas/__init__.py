"""
Pydantic schemas for API request/response validation.

This package provides all Pydantic models used for:
- Request validation
- Response serialization
- API documentation
"""

from src.schemas.access_level import AccessLevelCreate, AccessLevelResponse
from src.schemas.account import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    AccountUpdate,
    AssignAccessLevelsRequest,
    LoginRequest,
    LoginResponse,
)
from src.schemas.common import (
    ErrorResponse,
    MessageResponse,
    PaginationParams,
    ResponseMeta,
)

__all__ = [
    # Common
    "PaginationParams",
    "MessageResponse",
    "ResponseMeta",
    "ErrorResponse",
    # Account
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountListResponse",
    "LoginRequest",
    "LoginResponse",
    "AssignAccessLevelsRequest",
    # Access level
    "AccessLevelCreate",
    "AccessLevelResponse",
]
