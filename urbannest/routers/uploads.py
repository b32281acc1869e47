"""
Image upload API endpoint.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import List, Optional

from urbannest.models.user import User
from urbannest.services.upload import UploadService
from urbannest.schemas.upload import UploadBatchResponse
from urbannest.schemas.error import get_error_responses
from urbannest.utils.dependencies import get_current_user, get_upload_service


router = APIRouter(tags=["Uploads"])


@router.post(
    "/upload",
    response_model=UploadBatchResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Upload property images",
    description=(
        "Upload up to five JPG, PNG or WebP images (5MB each) in the multipart field "
        "'files'. Each file succeeds or fails on its own."
    ),
    responses=get_error_responses(400, 401, 500)
)
async def upload_images(
    files: Optional[List[UploadFile]] = File(None, description="Images to upload"),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service)
) -> UploadBatchResponse:
    """
    Validate and store an image batch.

    Raises:
        FileUploadError: If no files were sent
        ResourceLimitExceededError: If more than the allowed number of files were sent
    """
    return await upload_service.process_batch(current_user.id, files)
