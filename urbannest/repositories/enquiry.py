"""
Enquiry repository.
Enquiries are only ever created against an available property and are never modified.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from urbannest.repositories.base import BaseRepository
from urbannest.models.enquiry import Enquiry
from urbannest.models.property import Property
from typing import Optional, List, Dict, Any, Sequence
import uuid
import logging

logger = logging.getLogger(__name__)


class EnquiryRepository(BaseRepository[Enquiry]):
    """Repository for tenant enquiries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Enquiry, db)

    async def list_for_properties(self, property_ids: Sequence[uuid.UUID]) -> List[Enquiry]:
        """
        List enquiries for a set of properties in one query.

        Args:
            property_ids: Properties whose enquiries to return

        Returns:
            List of enquiries, newest first; empty without querying when
            no ids are given
        """
        if not property_ids:
            return []

        try:
            query = (
                select(Enquiry)
                .where(Enquiry.property_id.in_(list(property_ids)))
                .order_by(Enquiry.created_at.desc())
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to list enquiries: {e}")
            raise

    async def create_for_available_property(self, data: Dict[str, Any]) -> Optional[Enquiry]:
        """
        Create an enquiry while holding a lock on the referenced property.

        The availability check and the insert share one transaction, so a
        property that is deleted or marked unavailable concurrently can not
        receive the enquiry.

        Args:
            data: Validated enquiry fields including property_id

        Returns:
            Created enquiry, or None if the property is missing or unavailable
        """
        property_id = data["property_id"]

        try:
            query = (
                select(Property.available)
                .where(Property.id == property_id)
                .with_for_update()
            )
            result = await self.db.execute(query)
            available = result.scalar_one_or_none()

            if not available:
                await self.db.commit()
                logger.debug(f"Enquiry rejected, property {property_id} missing or unavailable")
                return None

            enquiry = Enquiry(**data)
            self.db.add(enquiry)
            await self.db.commit()
            await self.db.refresh(enquiry)

            logger.debug(f"Created enquiry {enquiry.id} for property {property_id}")
            return enquiry
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create enquiry for property {property_id}: {e}")
            raise
