"""
Exception hierarchy for the UrbanNest API.
Each class fixes an HTTP status and a default message; handlers turn them into flat error bodies.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """HTTP error carrying a machine-readable error code."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Business-rule validation failure (400), optionally with per-field details."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class NotFoundError(APIException):
    """Missing resource (404)."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """No live session (401). No WWW-Authenticate challenge is sent."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED"
        )


class BadRequestError(APIException):
    """Generic 400."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Unknown email or wrong password; the two are indistinguishable."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class DuplicateEmailError(BadRequestError):
    """Signup with an email that is already registered."""

    def __init__(self, detail: str = "Email already registered"):
        super().__init__(detail)
        self.error_code = "DUPLICATE_EMAIL"


# Property specific exceptions
class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self, detail: str = "Property not found"):
        super().__init__(detail)


class PropertyUnavailableError(BadRequestError):
    """Enquiry against a missing or unavailable property."""

    def __init__(self, detail: str = "Property not found or not available"):
        super().__init__(detail)
        self.error_code = "PROPERTY_UNAVAILABLE"


class ResourceLimitExceededError(BadRequestError):
    """Resource limit exceeded exception."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.error_code = "RESOURCE_LIMIT_EXCEEDED"


# File upload exceptions
class FileUploadError(BadRequestError):
    """Batch-level upload error exception."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.error_code = "FILE_UPLOAD_ERROR"


class UploadRejectedError(BadRequestError):
    """
    A single uploaded file failed validation.
    Reported inside the batch result, never as the response status.
    """

    reason = "UPLOAD_REJECTED"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.error_code = self.reason


class FileSizeExceededError(UploadRejectedError):
    """File size exceeded exception."""

    reason = "FILE_TOO_LARGE"

    def __init__(self, max_size: int):
        super().__init__(f"File exceeds {max_size // (1024 * 1024)}MB limit")
        self.max_size = max_size


class UnsupportedFileTypeError(UploadRejectedError):
    """Declared content type is not an allowed image type."""

    reason = "UNSUPPORTED_FILE_TYPE"

    def __init__(self, file_type: str):
        super().__init__(f"Invalid file type: {file_type}. Allowed: JPG, PNG, WebP")
        self.file_type = file_type


class SignatureMismatchError(UploadRejectedError):
    """File bytes do not start with the signature of the declared type."""

    reason = "SIGNATURE_MISMATCH"

    def __init__(self, detail: str = "File content does not match declared type"):
        super().__init__(detail)
