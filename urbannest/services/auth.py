"""
Authentication service for signup, login, logout and session resolution.
Sessions are opaque tokens whose hashes are stored server-side.
"""

from typing import Optional, Tuple
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from urbannest.repositories.user import UserRepository
from urbannest.repositories.session import SessionRepository
from urbannest.models.user import User
from urbannest.schemas.auth import SignupRequest
from urbannest.utils.exceptions import InvalidCredentialsError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service managing the session lifecycle.
    Anonymous callers become authenticated on signup or login and
    return to anonymous on logout or once the session expires.
    """

    def __init__(self, db_session: AsyncSession, session_ttl: timedelta = timedelta(days=7)):
        self.db = db_session
        self.session_ttl = session_ttl
        self.user_repo = UserRepository(db_session)
        self.session_repo = SessionRepository(db_session)

    async def signup(self, signup_data: SignupRequest) -> Tuple[User, str]:
        """
        Register a new user and open a session for them.

        Args:
            signup_data: Validated signup payload

        Returns:
            Tuple of (created user, session token)

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        user = await self.user_repo.create_user(
            email=signup_data.email,
            password=signup_data.password,
            full_name=signup_data.full_name,
            phone=signup_data.phone
        )
        token = await self.session_repo.create_session(user.id, self.session_ttl)

        logger.info(f"User signed up: {user.email}", extra={"user_id": str(user.id)})
        return user, token

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate with email and password and open a new session.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, session token)

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.validate_password(email, password)
        if not user:
            logger.warning(f"Failed login attempt for email: {email}")
            raise InvalidCredentialsError()

        await self.session_repo.purge_expired()
        token = await self.session_repo.create_session(user.id, self.session_ttl)

        logger.info(f"User logged in: {user.email}", extra={"user_id": str(user.id)})
        return user, token

    async def logout(self, token: Optional[str]) -> bool:
        """
        Revoke the session behind a token, if any.

        Returns:
            True if a session was removed
        """
        if not token:
            return False

        revoked = await self.session_repo.revoke(token)
        if revoked:
            logger.info("Session revoked on logout")
        return revoked

    async def resolve_session(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a session token to its user.

        Args:
            token: Raw token from the session cookie

        Returns:
            User for a live session, None for a missing, unknown or expired token
        """
        if not token:
            return None

        user_id = await self.session_repo.get_user_id(token)
        if not user_id:
            return None

        return await self.user_repo.get_by_id(user_id)
