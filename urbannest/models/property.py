"""
Property model for rental listings.
Handles listing data, availability and ownership.
"""

from sqlalchemy import String, Text, Integer, Boolean, JSON, Enum as SQLEnum, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from urbannest.database import Base
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from urbannest.models.user import User
    from urbannest.models.enquiry import Enquiry


class PropertyType(str, enum.Enum):
    """Kind of rental unit."""
    ROOM = "room"
    APARTMENT = "apartment"
    HOUSE = "house"


class Property(Base):
    """
    Property model for managing rental listings.
    Only the owning user may update or delete a listing.
    """

    __tablename__ = "properties"

    # Foreign key to the owning user
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    type: Mapped[PropertyType] = mapped_column(
        SQLEnum(
            PropertyType,
            name="property_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        nullable=False,
        index=True,
        comment="Property type - room, apartment or house"
    )

    # Whole currency units
    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Monthly rent in whole currency units"
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Free-text location"
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Number of bedrooms"
    )

    bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Number of bathrooms"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Detailed property description"
    )

    features: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of feature labels"
    )

    images: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of public image URLs"
    )

    available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="Whether the listing accepts enquiries"
    )

    landlord_phone: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Landlord contact phone"
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="properties"
    )

    enquiries: Mapped[List["Enquiry"]] = relationship(
        "Enquiry",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"


# Similar-listing lookups filter on type and availability, newest first
type_available_index = Index(
    'idx_properties_type_available',
    Property.type,
    Property.available,
    Property.created_at.desc()
)

# Owner dashboard
owner_created_index = Index(
    'idx_properties_user_created',
    Property.user_id,
    Property.created_at.desc()
)
