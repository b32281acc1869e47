"""
FastAPI dependency injection utilities for services and authentication.
Provides reusable dependencies for route protection and user extraction.
"""

from datetime import timedelta
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from urbannest.config import Settings
from urbannest.database import get_db
from urbannest.models.user import User
from urbannest.services.auth import AuthService
from urbannest.services.property import PropertyService
from urbannest.services.enquiry import EnquiryService
from urbannest.services.upload import UploadService
from urbannest.utils.exceptions import UnauthorizedError
from urbannest.utils.file_utils import FileValidator
import logging

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_app_settings)
) -> Optional[str]:
    """Raw session token from the request cookie, if any."""
    return request.cookies.get(settings.session_cookie_name)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session
        settings: Application settings

    Returns:
        AuthService instance
    """
    return AuthService(db, session_ttl=timedelta(days=settings.session_ttl_days))


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """Get property service instance."""
    return PropertyService(db)


async def get_enquiry_service(db: AsyncSession = Depends(get_db)) -> EnquiryService:
    """Get enquiry service instance."""
    return EnquiryService(db)


def get_upload_service(
    request: Request,
    settings: Settings = Depends(get_app_settings)
) -> UploadService:
    """
    Get upload service bound to the application's file storage.

    Args:
        request: Current request, used to reach app state
        settings: Application settings

    Returns:
        UploadService instance
    """
    validator = FileValidator(
        max_size=settings.max_upload_size,
        allowed_types=settings.allowed_upload_types
    )
    return UploadService(validator, request.app.state.storage, max_files=settings.max_files_per_upload)


async def get_optional_current_user(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[User]:
    """
    Get the user behind the session cookie, if there is one.

    Returns:
        User for a live session, None otherwise
    """
    return await auth_service.resolve_session(token)


async def get_current_user(
    user: Optional[User] = Depends(get_optional_current_user)
) -> User:
    """
    Require an authenticated user.

    Returns:
        Current User object

    Raises:
        UnauthorizedError: If there is no live session
    """
    if user is None:
        raise UnauthorizedError()
    return user
