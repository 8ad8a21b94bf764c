"""
Access level service for role definitions.

This module provides:
- Access level creation with duplicate name check
- Access level retrieval and listing
"""

import logging

from src.exceptions import AlreadyExistsError, InvalidInputError, NotFoundError
from src.models.access_level import AccessLevel
from src.repositories.ports import AccessLevelRepositoryPort
from src.schemas.access_level import AccessLevelCreate, AccessLevelResponse

logger = logging.getLogger(__name__)


class AccessLevelService:
    """
    Service class for access level operations.

    Names are unique among active access levels; the check happens here,
    before the insert.
    """

    def __init__(self, access_level_repo: AccessLevelRepositoryPort):
        """
        Initialize AccessLevelService.

        Args:
            access_level_repo: Store for access levels
        """
        self.access_level_repo = access_level_repo

    async def create_access_level(
        self, request: AccessLevelCreate
    ) -> AccessLevelResponse:
        """
        Create a new access level.

        Args:
            request: Name and optional description

        Returns:
            AccessLevelResponse of the created access level

        Raises:
            InvalidInputError: If the name is blank
            AlreadyExistsError: If an active access level already has this name
        """
        if not request.name or not request.name.strip():
            raise InvalidInputError("name", "Access level name is required")
        name = request.name.strip()

        try:
            await self.access_level_repo.get_by_name(name)
        except NotFoundError:
            pass
        else:
            logger.warning(f"Access level creation rejected: name '{name}' already in use")
            raise AlreadyExistsError(f"Access level '{name}'")

        access_level = await self.access_level_repo.create(
            AccessLevel(name=name, description=request.description)
        )
        logger.info(f"Access level {access_level.id} ('{name}') created")

        return AccessLevelResponse.model_validate(access_level)

    async def get_access_level(self, access_level_id: int) -> AccessLevelResponse:
        """
        Get an access level by ID.

        Raises:
            NotFoundError: If the access level does not exist
        """
        access_level = await self.access_level_repo.get_by_id(access_level_id)
        return AccessLevelResponse.model_validate(access_level)

    async def list_access_levels(self) -> list[AccessLevelResponse]:
        """List all active access levels ordered by name."""
        access_levels = await self.access_level_repo.list_all()
        return [AccessLevelResponse.model_validate(level) for level in access_levels]
