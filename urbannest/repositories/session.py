"""
Session repository backing cookie authentication.
Stores only a SHA-256 hash of each opaque token together with its expiry.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from urbannest.repositories.base import BaseRepository
from urbannest.models.session import UserSession
from urbannest.database import utcnow
from urbannest.utils.security import generate_session_token, hash_token
from datetime import timedelta
from typing import Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class SessionRepository(BaseRepository[UserSession]):
    """
    Repository for server-side sessions.
    A session is valid only while expires_at lies in the future.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(UserSession, db)

    async def create_session(self, user_id: uuid.UUID, ttl: timedelta) -> str:
        """
        Mint a token for the user and persist its hash.

        Args:
            user_id: Authenticated user's id
            ttl: Fixed session lifetime

        Returns:
            Raw token to hand to the client
        """
        token = generate_session_token()
        await self.create({
            "token_hash": hash_token(token),
            "user_id": user_id,
            "expires_at": utcnow() + ttl,
        })
        logger.debug(f"Created session for user {user_id}")
        return token

    async def get_user_id(self, token: str) -> Optional[uuid.UUID]:
        """
        Resolve a token to its user id.

        Returns:
            User id, or None when the token is unknown or expired
        """
        try:
            query = select(UserSession.user_id).where(
                UserSession.token_hash == hash_token(token),
                UserSession.expires_at > utcnow()
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to resolve session: {e}")
            raise

    async def revoke(self, token: str) -> bool:
        """Delete the session for a token. Returns whether one existed."""
        return await self.delete_where(UserSession.token_hash == hash_token(token)) > 0

    async def purge_expired(self) -> int:
        """Delete every expired session. Returns the number removed."""
        purged = await self.delete_where(UserSession.expires_at <= utcnow())
        if purged:
            logger.info(f"Purged {purged} expired sessions")
        return purged
