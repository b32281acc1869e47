"""
Pydantic schemas for property requests and responses.
Handles property create, update and read payloads.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from urbannest.models.property import PropertyType
from urbannest.schemas.common import APIModel, require_text


class PropertyCreate(APIModel):
    """
    Schema for creating a new property.
    Any owner field sent by the client is ignored; the caller is the owner.
    """

    title: str = Field(..., max_length=255, description="Property listing title", examples=["Sunny bedsitter near campus"])
    type: PropertyType = Field(..., description="Property type - room, apartment or house", examples=["apartment"])
    price: int = Field(..., ge=0, strict=True, description="Monthly rent in whole currency units", examples=[15000])
    location: str = Field(..., max_length=255, description="Free-text location", examples=["Kilimani, Nairobi"])
    bedrooms: int = Field(1, ge=0, strict=True, description="Number of bedrooms")
    bathrooms: int = Field(1, ge=0, strict=True, description="Number of bathrooms")
    description: Optional[str] = Field(None, description="Detailed property description")
    features: List[str] = Field(default_factory=list, description="Feature labels, in display order")
    images: List[str] = Field(default_factory=list, description="Public image URLs, in display order")
    available: bool = Field(True, description="Whether the listing accepts enquiries")
    landlord_phone: str = Field(..., max_length=50, description="Landlord contact phone", examples=["+254700000000"])

    @field_validator("title", "location", "landlord_phone")
    @classmethod
    def validate_required_text(cls, v, info):
        """Required text fields may not be blank."""
        return require_text(v, info.field_name)


class PropertyUpdate(APIModel):
    """
    Schema for a partial property update.
    Only fields present in the request body are changed.
    """

    title: Optional[str] = Field(None, max_length=255)
    type: Optional[PropertyType] = None
    price: Optional[int] = Field(None, ge=0, strict=True)
    location: Optional[str] = Field(None, max_length=255)
    bedrooms: Optional[int] = Field(None, ge=0, strict=True)
    bathrooms: Optional[int] = Field(None, ge=0, strict=True)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    images: Optional[List[str]] = None
    available: Optional[bool] = None
    landlord_phone: Optional[str] = Field(None, max_length=50)

    @field_validator("title", "location", "landlord_phone")
    @classmethod
    def validate_required_text(cls, v, info):
        """Text fields that exist on every property may not be cleared."""
        return require_text(v, info.field_name)

    @field_validator("type", "price", "bedrooms", "bathrooms", "features", "images", "available")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class PropertyResponse(APIModel):
    """Schema for property data in responses."""

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    type: PropertyType
    price: int
    location: str
    bedrooms: int
    bathrooms: int
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    available: bool
    landlord_phone: str
    created_at: datetime
    updated_at: datetime
