"""
Access level API routes.

This module provides:
- POST /api/v1/access-levels - Create access level
- GET /api/v1/access-levels - List access levels
- GET /api/v1/access-levels/{access_level_id} - Get access level
"""

from fastapi import APIRouter, status

from src.api.dependencies import AccessLevelServiceDep
from src.schemas.access_level import AccessLevelCreate, AccessLevelResponse

router = APIRouter(prefix="/access-levels", tags=["Access Levels"])


@router.post(
    "",
    response_model=AccessLevelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create access level",
)
async def create_access_level(
    access_level_data: AccessLevelCreate,
    access_level_service: AccessLevelServiceDep,
) -> AccessLevelResponse:
    """
    Create a new access level.

    Raises:
        - 400 Bad Request: Blank name or name already in use
    """
    return await access_level_service.create_access_level(access_level_data)


@router.get(
    "",
    response_model=list[AccessLevelResponse],
    summary="List access levels",
)
async def list_access_levels(
    access_level_service: AccessLevelServiceDep,
) -> list[AccessLevelResponse]:
    """List all access levels ordered by name."""
    return await access_level_service.list_access_levels()


@router.get(
    "/{access_level_id}",
    response_model=AccessLevelResponse,
    summary="Get access level",
)
async def get_access_level(
    access_level_id: int,
    access_level_service: AccessLevelServiceDep,
) -> AccessLevelResponse:
    """
    Get access level by ID.

    Raises:
        - 404 Not Found: Access level does not exist
    """
    return await access_level_service.get_access_level(access_level_id)
