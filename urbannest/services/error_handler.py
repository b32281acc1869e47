"""
Error handling service for consistent error response formatting and logging.
Every failure is returned as a flat {"error": message} body; internals are only logged.
"""

from typing import Dict, Any, Optional, List, Sequence
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from urbannest.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
REQUEST_ID_HEADER = "X-Request-ID"


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Each handled error is logged with a short request id that is echoed in a header.
    """

    # Message for request validation failures, keyed by resource path segment
    VALIDATION_MESSAGES = {
        "properties": "Invalid property data",
        "enquiries": "Invalid enquiry data",
        "auth": "Invalid email or password format",
    }
    # Used instead when a required field is absent or null
    MISSING_FIELD_MESSAGES = {
        "auth": "Email and password required",
    }
    DEFAULT_VALIDATION_MESSAGE = "Invalid request data"

    @staticmethod
    def format_error_response(
        message: str,
        details: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            message: Human-readable error message
            details: Optional list of validation error details

        Returns:
            Formatted error response dictionary
        """
        response: Dict[str, Any] = {"error": message}
        if details:
            response["details"] = details
        return response

    @staticmethod
    def _response(
        status_code: int,
        content: Dict[str, Any],
        request_id: str,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        response_headers = dict(headers or {})
        response_headers[REQUEST_ID_HEADER] = request_id
        return JSONResponse(status_code=status_code, content=content, headers=response_headers)

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        details = None
        if isinstance(exception, ValidationError) and exception.field_errors:
            details = exception.field_errors

        return ErrorHandlerService._response(
            exception.status_code,
            ErrorHandlerService.format_error_response(exception.detail, details),
            request_id,
            exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request validation errors with detailed field information.

        Args:
            exception: FastAPI request validation error
            request: Optional FastAPI request object

        Returns:
            400 JSON response with validation error details
        """
        request_id = ErrorHandlerService._generate_request_id()

        validation_details = []
        for error in exception.errors():
            # Drop the "body"/"query" location prefix
            location = [str(loc) for loc in error["loc"][1:]] or [str(loc) for loc in error["loc"]]
            validation_details.append({
                "field": ".".join(location),
                "message": error["msg"],
                "type": error["type"]
            })

        logger.warning(
            f"Validation Error [{request_id}]: {len(validation_details)} field errors",
            extra={
                "error_count": len(validation_details),
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": validation_details
            }
        )

        message = ErrorHandlerService._validation_message(
            request.url.path if request else "",
            exception.errors()
        )
        return ErrorHandlerService._response(
            400,
            ErrorHandlerService.format_error_response(message, validation_details),
            request_id
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors without exposing database details.

        Args:
            exception: SQLAlchemy error
            request: Optional FastAPI request object

        Returns:
            500 JSON response with a generic message
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.error(
            f"Database Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        return ErrorHandlerService._response(
            500,
            ErrorHandlerService.format_error_response(INTERNAL_ERROR_MESSAGE),
            request_id
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions such as unknown routes.

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return ErrorHandlerService._response(
            exception.status_code,
            ErrorHandlerService.format_error_response(str(exception.detail)),
            request_id,
            getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors with secure error responses.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            500 JSON response with a generic message
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=exception
        )

        return ErrorHandlerService._response(
            500,
            ErrorHandlerService.format_error_response(INTERNAL_ERROR_MESSAGE),
            request_id
        )

    @staticmethod
    def _validation_message(path: str, errors: Sequence[Dict[str, Any]] = ()) -> str:
        segments = path.strip("/").split("/")
        missing = any(
            error.get("type") == "missing" or ("input" in error and error["input"] in (None, ""))
            for error in errors
        )
        for segment, message in ErrorHandlerService.VALIDATION_MESSAGES.items():
            if segment in segments:
                if missing:
                    return ErrorHandlerService.MISSING_FIELD_MESSAGES.get(segment, message)
                return message
        return ErrorHandlerService.DEFAULT_VALIDATION_MESSAGE

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]
