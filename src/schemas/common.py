"""
Common Pydantic schemas for API request/response handling.

This module provides:
- Pagination query parameters
- Plain message responses
- The standard error response format
"""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationParams(BaseModel):
    """
    Query parameters for paginated list endpoints.

    Values are not range-checked here: out-of-range input is normalized by
    the service (page < 1 becomes 1, page_size outside [1, 100] becomes 10).

    Attributes:
        page: Page number (1-indexed)
        page_size: Number of items per page
    """

    page: int = Field(default=1, description="Page number (1-indexed)")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description=f"Number of items per page (1-{MAX_PAGE_SIZE})",
    )


class MessageResponse(BaseModel):
    """
    Plain confirmation message.

    Attributes:
        message: Human-readable outcome
    """

    message: str = Field(description="Human-readable outcome")


class ResponseMeta(BaseModel):
    """
    Metadata included in error responses.

    Attributes:
        request_id: Unique request identifier for tracing
    """

    request_id: str | None = Field(
        default=None,
        description="Unique request ID for tracing",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Used for all error responses across the API.

    Attributes:
        error: Error information
        meta: Response metadata
    """

    class Error(BaseModel):
        """Nested error information."""

        code: str = Field(description="Error code (e.g., VALIDATION_ERROR)")
        message: str = Field(description="Human-readable error message")
        details: dict[str, Any] | list[Any] = Field(
            default_factory=dict,
            description="Detailed error information",
        )

    error: Error
    meta: ResponseMeta
