"""
Enquiry model for prospective tenant contact requests.
"""

from sqlalchemy import String, Text, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from urbannest.database import Base
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from urbannest.models.property import Property


class Enquiry(Base):
    """
    Contact request tied to one property.
    Readable only by the property's owner; never modified after creation.
    """

    __tablename__ = "enquiries"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this enquiry is about"
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Enquirer name"
    )

    phone: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Enquirer phone"
    )

    whatsapp: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Enquirer prefers to be contacted over WhatsApp"
    )

    message: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Optional free-text message"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="enquiries"
    )

    def __repr__(self) -> str:
        return f"<Enquiry(id={self.id}, property_id={self.property_id})>"
