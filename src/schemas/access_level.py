"""
Access level Pydantic schemas for API request/response handling.
"""

from pydantic import BaseModel, Field, field_validator


class AccessLevelCreate(BaseModel):
    """
    Schema for creating an access level.

    Attributes:
        name: Unique role name (1-50 characters)
        description: Optional description
    """

    name: str = Field(
        max_length=50,
        description="Role name, unique among active access levels",
        examples=["admin"],
    )
    description: str | None = Field(
        default=None,
        description="Optional description",
        examples=["Full administrative access"],
    )


class AccessLevelResponse(BaseModel):
    """
    Schema for access level response.

    Attributes:
        id: Access level identifier
        name: Role name
        description: Description ("" when unset)
    """

    id: int = Field(description="Access level identifier")
    name: str = Field(description="Role name")
    description: str = Field(default="", description="Description")

    model_config = {"from_attributes": True}

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: str | None) -> str:
        """Render a missing description as an empty string."""
        return value or ""
