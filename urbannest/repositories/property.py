"""
Property repository for managing rental listings.
Ownership is enforced inside the UPDATE and DELETE statements themselves.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from urbannest.repositories.base import BaseRepository
from urbannest.models.property import Property, PropertyType
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)

SIMILAR_PROPERTIES_LIMIT = 3


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    All list queries return the newest listings first.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def list_properties(self, available: Optional[bool] = None) -> List[Property]:
        """
        List properties, optionally filtered by availability.

        Args:
            available: True or False to filter, None for both states

        Returns:
            List of properties, newest first
        """
        try:
            query = select(Property).order_by(Property.created_at.desc())
            if available is not None:
                query = query.where(Property.available == available)

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(f"Listed {len(properties)} properties (available={available})")
            return properties
        except Exception as e:
            logger.error(f"Failed to list properties: {e}")
            raise

    async def list_by_owner(self, user_id: uuid.UUID) -> List[Property]:
        """
        List every property owned by a user, available or not.

        Args:
            user_id: Owner's id

        Returns:
            List of properties, newest first
        """
        try:
            query = (
                select(Property)
                .where(Property.user_id == user_id)
                .order_by(Property.created_at.desc())
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to list properties for owner {user_id}: {e}")
            raise

    async def list_by_type(
        self,
        property_type: PropertyType,
        exclude_id: Optional[uuid.UUID] = None,
        limit: int = SIMILAR_PROPERTIES_LIMIT
    ) -> List[Property]:
        """
        List available properties of one type.

        Args:
            property_type: Type to match
            exclude_id: Property to leave out, usually the one being viewed
            limit: Maximum number of results

        Returns:
            Up to `limit` available properties, newest first
        """
        try:
            query = select(Property).where(
                Property.type == property_type,
                Property.available.is_(True)
            )
            if exclude_id is not None:
                query = query.where(Property.id != exclude_id)

            query = query.order_by(Property.created_at.desc()).limit(limit)

            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to list properties of type {property_type}: {e}")
            raise

    async def create_property(self, owner_id: uuid.UUID, data: Dict[str, Any]) -> Property:
        """
        Create a property owned by the given user.

        Args:
            owner_id: Authenticated caller's id
            data: Validated property fields

        Returns:
            Created property
        """
        # The caller is always the owner, whatever the payload says
        create_data = {**data, "user_id": owner_id}
        create_data.pop("id", None)

        created_property = await self.create(create_data)
        logger.info(
            f"Created property {created_property.id} for owner {owner_id}",
            extra={"property_id": str(created_property.id), "user_id": str(owner_id)}
        )
        return created_property

    async def update_property(
        self,
        property_id: uuid.UUID,
        owner_id: uuid.UUID,
        data: Dict[str, Any]
    ) -> Optional[Property]:
        """
        Update a property if and only if the caller owns it.

        Args:
            property_id: Property to update
            owner_id: Authenticated caller's id
            data: Validated fields to change

        Returns:
            Updated property, or None if it is missing or owned by someone else
        """
        update_data = {
            k: v for k, v in data.items()
            if k not in ("id", "user_id", "created_at", "updated_at")
        }
        return await self.update_where(property_id, update_data, Property.user_id == owner_id)

    async def delete_property(self, property_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """
        Delete a property if and only if the caller owns it.

        Returns:
            True if a row was removed
        """
        deleted = await self.delete_where(
            Property.id == property_id,
            Property.user_id == owner_id
        )
        if deleted:
            logger.info(f"Deleted property {property_id} by owner {owner_id}")
        return deleted > 0
