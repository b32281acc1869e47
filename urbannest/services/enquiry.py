"""
Enquiry service for creating enquiries and listing them for property owners.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from urbannest.repositories.enquiry import EnquiryRepository
from urbannest.repositories.property import PropertyRepository
from urbannest.models.enquiry import Enquiry
from urbannest.models.user import User
from urbannest.schemas.enquiry import EnquiryCreate
from urbannest.utils.exceptions import PropertyUnavailableError
import logging

logger = logging.getLogger(__name__)


class EnquiryService:
    """Service layer for tenant enquiries."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.enquiry_repo = EnquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_enquiry(self, enquiry_data: EnquiryCreate) -> Enquiry:
        """
        Record an enquiry against an available property.

        Args:
            enquiry_data: Validated enquiry payload

        Returns:
            Created enquiry

        Raises:
            PropertyUnavailableError: If the property is missing or not available
        """
        enquiry = await self.enquiry_repo.create_for_available_property(enquiry_data.model_dump())
        if not enquiry:
            raise PropertyUnavailableError()

        logger.info(
            f"Enquiry received for property {enquiry.property_id}",
            extra={"enquiry_id": str(enquiry.id), "property_id": str(enquiry.property_id)}
        )
        return enquiry

    async def list_owner_enquiries(self, owner: User) -> List[Enquiry]:
        """
        List enquiries across every property the owner has.

        Args:
            owner: Authenticated user

        Returns:
            Enquiries, newest first
        """
        properties = await self.property_repo.list_by_owner(owner.id)
        return await self.enquiry_repo.list_for_properties([p.id for p in properties])
