"""
Service layer for business logic.
"""

from urbannest.services.auth import AuthService
from urbannest.services.property import PropertyService
from urbannest.services.enquiry import EnquiryService
from urbannest.services.upload import UploadService
from urbannest.services.error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "EnquiryService",
    "UploadService",
    "ErrorHandlerService"
]
