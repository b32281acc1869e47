"""
Pydantic schemas for authentication requests and responses.
Handles signup, login and session status payloads.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional

from urbannest.schemas.common import APIModel
from urbannest.schemas.user import UserResponse


class SignupRequest(APIModel):
    """Schema for account registration."""

    email: EmailStr = Field(..., description="Email address used to log in", examples=["landlord@example.com"])
    password: str = Field(..., min_length=1, max_length=128, description="Account password")
    full_name: Optional[str] = Field(None, max_length=255, description="Display name")
    phone: Optional[str] = Field(None, max_length=50, description="Contact phone")

    @field_validator("full_name", "phone")
    @classmethod
    def blank_to_none(cls, v):
        """Treat blank optional text as absent."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class LoginRequest(APIModel):
    """Schema for login. Email format is not re-validated here."""

    email: str = Field(..., min_length=1, max_length=255, description="Registered email address")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")


class AuthResponse(APIModel):
    """Current user wrapper returned by every auth endpoint."""

    user: Optional[UserResponse] = Field(None, description="Authenticated user, or null")


class SuccessResponse(APIModel):
    """Generic acknowledgement body."""

    success: bool = True
