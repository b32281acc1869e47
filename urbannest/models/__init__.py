"""
Database models for the UrbanNest API.
Includes User, UserSession, Property and Enquiry models with relationships.
"""

from urbannest.models.user import User
from urbannest.models.session import UserSession
from urbannest.models.property import Property, PropertyType
from urbannest.models.enquiry import Enquiry

# Export all models for easy importing
__all__ = [
    "User",
    "UserSession",
    "Property",
    "PropertyType",
    "Enquiry",
]
