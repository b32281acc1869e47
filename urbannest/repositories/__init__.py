"""
Repository layer for data access operations.
"""

from urbannest.repositories.base import BaseRepository
from urbannest.repositories.user import UserRepository
from urbannest.repositories.session import SessionRepository
from urbannest.repositories.property import PropertyRepository
from urbannest.repositories.enquiry import EnquiryRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "PropertyRepository",
    "EnquiryRepository"
]
