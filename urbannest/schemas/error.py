"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any


class ErrorDetail(BaseModel):
    """Schema for individual validation error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["price"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier", examples=["int_type"])


class ErrorResponse(BaseModel):
    """Schema for the flat error body returned by every failing endpoint."""

    error: str = Field(..., description="Human-readable error message", examples=["Property not found"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Validation error details")


class HealthResponse(BaseModel):
    """Schema for the health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str
    database: str = Field(..., examples=["connected"])


ERROR_DESCRIPTIONS = {
    400: "Invalid request",
    401: "Authentication required",
    404: "Resource not found",
    500: "Internal server error",
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Build the OpenAPI `responses` mapping for a route.

    Args:
        status_codes: HTTP status codes the route can fail with

    Returns:
        Mapping usable as the `responses` argument of a route decorator
    """
    return {
        code: {"model": ErrorResponse, "description": ERROR_DESCRIPTIONS.get(code, "Error")}
        for code in status_codes
    }
