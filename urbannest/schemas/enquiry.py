"""
Pydantic schemas for enquiry requests and responses.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from urbannest.schemas.common import APIModel, require_text


class EnquiryCreate(APIModel):
    """Schema for a prospective tenant's contact request."""

    property_id: uuid.UUID = Field(..., description="Property the enquiry is about")
    name: str = Field(..., description="Enquirer name", examples=["Wanjiku"])
    phone: str = Field(..., description="Enquirer phone", examples=["+254711111111"])
    whatsapp: bool = Field(False, description="Prefers contact over WhatsApp")
    message: Optional[str] = Field(None, description="Optional message to the landlord")

    @field_validator("name", "phone")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)


class EnquiryResponse(APIModel):
    """Schema for enquiry data in responses."""

    id: uuid.UUID
    property_id: uuid.UUID
    name: str
    phone: str
    whatsapp: bool
    message: Optional[str] = None
    created_at: datetime
