"""
Enquiry API endpoints.
Anyone may send an enquiry; only property owners may read them.
"""

from fastapi import APIRouter, Depends, status
from typing import List

from urbannest.models.user import User
from urbannest.services.enquiry import EnquiryService
from urbannest.schemas.enquiry import EnquiryCreate, EnquiryResponse
from urbannest.schemas.error import get_error_responses
from urbannest.utils.dependencies import get_current_user, get_enquiry_service


router = APIRouter(tags=["Enquiries"])


@router.post(
    "/enquiries",
    response_model=EnquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send enquiry",
    description="Contact the landlord of an available property",
    responses=get_error_responses(400, 500)
)
async def create_enquiry(
    enquiry_data: EnquiryCreate,
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
) -> EnquiryResponse:
    """
    Create an enquiry.

    Raises:
        PropertyUnavailableError: If the property is missing or not available
    """
    enquiry = await enquiry_service.create_enquiry(enquiry_data)
    return EnquiryResponse.model_validate(enquiry)


@router.get(
    "/my/enquiries",
    response_model=List[EnquiryResponse],
    summary="My enquiries",
    description="Enquiries received across all of the logged-in user's properties",
    responses=get_error_responses(401, 500)
)
async def list_my_enquiries(
    current_user: User = Depends(get_current_user),
    enquiry_service: EnquiryService = Depends(get_enquiry_service)
) -> List[EnquiryResponse]:
    enquiries = await enquiry_service.list_owner_enquiries(current_user)
    return [EnquiryResponse.model_validate(e) for e in enquiries]
