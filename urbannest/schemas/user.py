"""
Pydantic schemas for user responses.
"""

from pydantic import Field
from typing import Optional
import uuid

from urbannest.schemas.common import APIModel


class UserResponse(APIModel):
    """Public view of a user. The password hash is never exposed."""

    id: uuid.UUID = Field(..., description="Unique user identifier")
    email: str = Field(..., description="User's email address", examples=["tenant@example.com"])
    full_name: Optional[str] = Field(None, description="User's display name", examples=["Jane Doe"])
    phone: Optional[str] = Field(None, description="User's phone number", examples=["+254700000000"])
