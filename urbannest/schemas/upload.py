"""
Pydantic schemas for image upload batch results.
"""

from pydantic import Field
from typing import Optional, List

from urbannest.schemas.common import APIModel


class UploadResult(APIModel):
    """Outcome for one uploaded file, in request order."""

    success: bool
    url: Optional[str] = Field(None, description="Public URL of the stored image")
    error: Optional[str] = Field(None, description="Why the file was rejected")
    file_name: Optional[str] = Field(None, description="Original name of the uploaded file")


class UploadSummary(APIModel):
    """Totals over one upload batch."""

    total: int
    successful: int
    failed: int


class UploadBatchResponse(APIModel):
    """Schema for the response of an upload batch."""

    results: List[UploadResult]
    summary: UploadSummary
