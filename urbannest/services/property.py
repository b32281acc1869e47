"""
Property service for listing, reading and owner-gated mutation of properties.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from urbannest.repositories.property import PropertyRepository
from urbannest.models.property import Property
from urbannest.models.user import User
from urbannest.schemas.property import PropertyCreate, PropertyUpdate
from urbannest.utils.exceptions import PropertyNotFoundError, ValidationError
from urbannest.utils.validators import parse_uuid
import logging

logger = logging.getLogger(__name__)

NOT_FOUND_OR_NOT_OWNED = "Property not found or not authorized"


class PropertyService:
    """
    Service layer for property listings.
    A non-owner is told the property does not exist rather than that access is denied.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    async def list_properties(self, available: Optional[bool] = None) -> List[Property]:
        """List properties, newest first, optionally filtered by availability."""
        return await self.property_repo.list_properties(available)

    async def get_property(self, property_id: str) -> Property:
        """
        Get a single property.

        Args:
            property_id: Raw identifier from the URL

        Returns:
            Property

        Raises:
            PropertyNotFoundError: If the id is malformed or unknown
        """
        parsed_id = parse_uuid(property_id)
        if parsed_id is None:
            raise PropertyNotFoundError()

        property_obj = await self.property_repo.get_by_id(parsed_id)
        if not property_obj:
            raise PropertyNotFoundError()

        return property_obj

    async def get_similar_properties(self, property_id: str) -> List[Property]:
        """
        Find up to three available properties of the same type.

        Raises:
            PropertyNotFoundError: If the reference property does not exist
        """
        property_obj = await self.get_property(property_id)
        return await self.property_repo.list_by_type(property_obj.type, exclude_id=property_obj.id)

    async def list_owned_properties(self, owner: User) -> List[Property]:
        """All of the owner's properties, available or not."""
        return await self.property_repo.list_by_owner(owner.id)

    async def create_property(self, owner: User, property_data: PropertyCreate) -> Property:
        """
        Create a property owned by the caller.

        Args:
            owner: Authenticated user
            property_data: Validated property payload

        Returns:
            Created property
        """
        return await self.property_repo.create_property(owner.id, property_data.model_dump())

    async def update_property(
        self,
        property_id: str,
        owner: User,
        property_data: PropertyUpdate
    ) -> Property:
        """
        Apply a partial update to a property owned by the caller.

        Args:
            property_id: Raw identifier from the URL
            owner: Authenticated user
            property_data: Fields to change; only fields sent by the client are applied

        Returns:
            Updated property

        Raises:
            ValidationError: If no fields were sent
            PropertyNotFoundError: If the property is missing or owned by someone else
        """
        update_data = property_data.model_dump(exclude_unset=True)
        if not update_data:
            raise ValidationError("No fields to update")

        parsed_id = parse_uuid(property_id)
        if parsed_id is None:
            raise PropertyNotFoundError(NOT_FOUND_OR_NOT_OWNED)

        owner_id = owner.id
        updated = await self.property_repo.update_property(parsed_id, owner_id, update_data)
        if not updated:
            logger.info(f"Update of property {parsed_id} by {owner_id} matched no owned row")
            raise PropertyNotFoundError(NOT_FOUND_OR_NOT_OWNED)

        logger.info(f"Updated property {parsed_id}", extra={"fields": sorted(update_data)})
        return updated

    async def delete_property(self, property_id: str, owner: User) -> None:
        """
        Delete a property owned by the caller.

        Raises:
            PropertyNotFoundError: If the property is missing or owned by someone else
        """
        parsed_id = parse_uuid(property_id)
        if parsed_id is None or not await self.property_repo.delete_property(parsed_id, owner.id):
            raise PropertyNotFoundError(NOT_FOUND_OR_NOT_OWNED)
