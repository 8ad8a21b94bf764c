"""
Account Pydantic schemas for API request/response handling.

This module provides:
- Account creation and update schemas
- Account response and list schemas
- Login request and response schemas
- Access level assignment schema

Field lengths are enforced here; semantic rules (non-blank names, email
shape, password length, uniqueness) are enforced by AccountService so they
apply to every caller, not just HTTP.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.schemas.access_level import AccessLevelResponse


class AccountCreate(BaseModel):
    """
    Schema for account registration.

    Attributes:
        first_name: Given name (1-50 characters)
        last_name: Family name (1-50 characters)
        email: Email address (must contain "@")
        phone_number: Optional phone number
        password: Plain password (min 8 characters, hashed before storage)
    """

    first_name: str = Field(
        max_length=50,
        description="Given name (1-50 characters)",
        examples=["John"],
    )
    last_name: str = Field(
        max_length=50,
        description="Family name (1-50 characters)",
        examples=["Doe"],
    )
    email: str = Field(
        max_length=255,
        description="Email address, unique among active accounts",
        examples=["john.doe@example.com"],
    )
    phone_number: str | None = Field(
        default=None,
        max_length=20,
        description="Optional phone number",
        examples=["+1-555-0100"],
    )
    password: str = Field(
        description="Password (min 8 characters)",
    )


class AccountUpdate(BaseModel):
    """
    Schema for updating account information.

    All fields are optional. A field that is missing or blank leaves the
    stored value unchanged.

    Attributes:
        first_name: New given name
        last_name: New family name
        email: New email address
        phone_number: New phone number
    """

    first_name: str | None = Field(default=None, max_length=50, description="New given name")
    last_name: str | None = Field(default=None, max_length=50, description="New family name")
    email: str | None = Field(default=None, max_length=255, description="New email address")
    phone_number: str | None = Field(
        default=None,
        max_length=20,
        description="New phone number",
    )


class AccountResponse(BaseModel):
    """
    Schema for account response.

    Never carries credential data.

    Attributes:
        id: Account's unique identifier
        first_name: Given name
        last_name: Family name
        email: Email address
        phone_number: Phone number ("" when unset)
        access_levels: Currently assigned access levels
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    id: uuid.UUID = Field(description="Account's unique identifier (UUID)")
    first_name: str = Field(description="Given name")
    last_name: str = Field(description="Family name")
    email: str = Field(description="Email address")
    phone_number: str = Field(default="", description="Phone number")
    access_levels: list[AccessLevelResponse] = Field(
        default_factory=list,
        description="Currently assigned access levels",
    )
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = {"from_attributes": True}

    @field_validator("phone_number", mode="before")
    @classmethod
    def default_phone_number(cls, value: str | None) -> str:
        """Render a missing phone number as an empty string."""
        return value or ""


class AccountListResponse(BaseModel):
    """
    Schema for a page of accounts.

    Attributes:
        accounts: Accounts on the current page
        total: Total number of active accounts (independent of the page)
        page: Normalized page number
        page_size: Normalized page size
    """

    accounts: list[AccountResponse] = Field(description="Accounts on this page")
    total: int = Field(description="Total number of active accounts")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Number of items per page")


class LoginRequest(BaseModel):
    """
    Schema for account login request.

    Attributes:
        email: Account's email address
        password: Account's password
    """

    email: str = Field(description="Account's email address")
    password: str = Field(description="Account's password")


class LoginResponse(BaseModel):
    """
    Schema for a successful login.

    Attributes:
        account: The authenticated account
        message: Confirmation message
    """

    account: AccountResponse
    message: str = Field(default="Login successful")


class AssignAccessLevelsRequest(BaseModel):
    """
    Schema for assigning access levels to an account.

    Attributes:
        access_level_ids: IDs of the access levels to assign, processed in order
    """

    access_level_ids: list[int] = Field(
        min_length=1,
        description="Access level IDs to assign",
        examples=[[1, 2]],
    )
