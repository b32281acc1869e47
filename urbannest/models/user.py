"""
User model for landlord accounts.
Stores credentials as a bcrypt hash; the plaintext password is never persisted.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from urbannest.database import Base
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from urbannest.models.property import Property
    from urbannest.models.session import UserSession


class User(Base):
    """
    User model for authentication.
    A user owns the properties they list and any number of concurrent sessions.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address, stored lower-cased"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    full_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name"
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Contact phone number"
    )

    # Rows are removed by the database cascade, never loaded for deletion
    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    sessions: Mapped[List["UserSession"]] = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"
