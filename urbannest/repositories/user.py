"""
User repository for the credential store.
Creates users with hashed passwords and validates login credentials.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from urbannest.repositories.base import BaseRepository
from urbannest.models.user import User
from urbannest.utils.exceptions import DuplicateEmailError
from urbannest.utils.security import hash_password, verify_password
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and looked up in lower case."""
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Plain text passwords never reach the database.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        phone: Optional[str] = None
    ) -> User:
        """
        Create a new user with a bcrypt-hashed password.

        Args:
            email: Email address, normalized before storage
            password: Plain text password
            full_name: Optional display name
            phone: Optional contact phone

        Returns:
            Created user instance

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        email = normalize_email(email)

        if await self.get_by_email(email):
            logger.info(f"Signup rejected, email already registered: {email}")
            raise DuplicateEmailError()

        create_data = {
            "email": email,
            "hashed_password": hash_password(password),
            "full_name": full_name,
            "phone": phone,
        }

        try:
            created_user = await self.create(create_data)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            logger.info(f"Signup rejected on unique constraint: {email}")
            raise DuplicateEmailError()

        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for, any case

        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", normalize_email(email))

    async def validate_password(self, email: str, password: str) -> Optional[User]:
        """
        Check login credentials.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            User instance if the credentials match, None for an unknown
            email or a wrong password alike
        """
        user = await self.get_by_email(email)
        if not user:
            logger.debug(f"Login attempt for unknown email: {email}")
            return None

        if not verify_password(password, user.hashed_password):
            logger.debug(f"Login attempt with wrong password for: {email}")
            return None

        return user
