"""
Utility modules for the UrbanNest API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    BadRequestError,
    InvalidCredentialsError,
    DuplicateEmailError,
    PropertyNotFoundError,
    PropertyUnavailableError,
    ResourceLimitExceededError,
    FileUploadError,
    UploadRejectedError,
    FileSizeExceededError,
    UnsupportedFileTypeError,
    SignatureMismatchError
)

from .security import (
    hash_password,
    verify_password,
    generate_session_token,
    hash_token
)
