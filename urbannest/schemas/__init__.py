"""
Pydantic schemas for request validation and response serialization.
"""

from urbannest.schemas.auth import SignupRequest, LoginRequest, AuthResponse, SuccessResponse
from urbannest.schemas.user import UserResponse
from urbannest.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse
from urbannest.schemas.enquiry import EnquiryCreate, EnquiryResponse
from urbannest.schemas.upload import UploadResult, UploadSummary, UploadBatchResponse
from urbannest.schemas.error import ErrorResponse, ErrorDetail, HealthResponse

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",
    "SuccessResponse",
    "UserResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "EnquiryCreate",
    "EnquiryResponse",
    "UploadResult",
    "UploadSummary",
    "UploadBatchResponse",
    "ErrorResponse",
    "ErrorDetail",
    "HealthResponse",
]
