"""
Property API endpoints for browsing listings and owner-managed CRUD.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional, List

from urbannest.models.user import User
from urbannest.services.property import PropertyService
from urbannest.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse
from urbannest.schemas.auth import SuccessResponse
from urbannest.schemas.error import get_error_responses
from urbannest.utils.dependencies import get_current_user, get_property_service


router = APIRouter(tags=["Properties"])


@router.get(
    "/properties",
    response_model=List[PropertyResponse],
    summary="List properties",
    description="List all properties, newest first, optionally filtered by availability",
    responses=get_error_responses(400, 500)
)
async def list_properties(
    available: Optional[bool] = Query(None, description="Only available (true) or unavailable (false) listings"),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_properties(available)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Get property",
    description="Get a single property by id",
    responses=get_error_responses(404, 500)
)
async def get_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Get property details.

    Raises:
        PropertyNotFoundError: If the id is malformed or unknown
    """
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj)


@router.get(
    "/properties/{property_id}/similar",
    response_model=List[PropertyResponse],
    summary="Similar properties",
    description="Up to three available properties of the same type",
    responses=get_error_responses(404, 500)
)
async def get_similar_properties(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_similar_properties(property_id)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing owned by the logged-in user",
    responses=get_error_responses(400, 401, 500)
)
async def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Args:
        property_data: Validated property payload; any owner field is ignored
        current_user: Authenticated owner
        property_service: Property service

    Returns:
        Created property
    """
    property_obj = await property_service.create_property(current_user, property_data)
    return PropertyResponse.model_validate(property_obj)


@router.patch(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Partially update a listing. Only the owner may update it.",
    responses=get_error_responses(400, 401, 404, 500)
)
async def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update a property owned by the caller.

    Raises:
        ValidationError: If the body changes nothing
        PropertyNotFoundError: If the property is missing or not owned by the caller
    """
    property_obj = await property_service.update_property(property_id, current_user, property_data)
    return PropertyResponse.model_validate(property_obj)


@router.delete(
    "/properties/{property_id}",
    response_model=SuccessResponse,
    summary="Delete property",
    description="Delete a listing. Only the owner may delete it.",
    responses=get_error_responses(401, 404, 500)
)
async def delete_property(
    property_id: str,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> SuccessResponse:
    await property_service.delete_property(property_id, current_user)
    return SuccessResponse(success=True)


@router.get(
    "/my/properties",
    response_model=List[PropertyResponse],
    summary="My properties",
    description="Every listing owned by the logged-in user, available or not",
    responses=get_error_responses(401, 500)
)
async def list_my_properties(
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_owned_properties(current_user)
    return [PropertyResponse.model_validate(p) for p in properties]
