"""
Authentication API endpoints for signup, login, logout and session status.
Sessions are carried in an HTTP-only cookie.
"""

from fastapi import APIRouter, Depends, Response, status
from typing import Optional
from urbannest.config import Settings
from urbannest.models.user import User
from urbannest.services.auth import AuthService
from urbannest.schemas.auth import SignupRequest, LoginRequest, AuthResponse, SuccessResponse
from urbannest.schemas.user import UserResponse
from urbannest.schemas.error import get_error_responses
from urbannest.utils.dependencies import (
    get_app_settings,
    get_auth_service,
    get_session_token
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token to the response as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/"
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/"
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new account",
    description="Create a user account and start a session",
    responses=get_error_responses(400, 500)
)
async def signup(
    signup_data: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
) -> AuthResponse:
    """
    Register a user and log them in.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    user, token = await auth_service.signup(signup_data)
    set_session_cookie(response, token, settings)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password and start a session",
    responses=get_error_responses(400, 401, 500)
)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
) -> AuthResponse:
    """
    Authenticate a user.

    Raises:
        InvalidCredentialsError: If the credentials do not match
    """
    user, token = await auth_service.login(login_data.email, login_data.password)
    set_session_cookie(response, token, settings)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post(
    "/logout",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="User logout",
    description="End the current session and clear the session cookie"
)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
) -> SuccessResponse:
    await auth_service.logout(token)
    clear_session_cookie(response, settings)
    return SuccessResponse(success=True)


@router.get(
    "/me",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Current user",
    description="Return the logged-in user, or null when there is no live session"
)
async def get_me(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Resolve the session cookie.

    Returns:
        The current user, or a null user for any failure
    """
    try:
        user: Optional[User] = await auth_service.resolve_session(token)
    except Exception as e:
        logger.error(f"Auth check error: {e}")
        return AuthResponse(user=None)

    if user is None:
        return AuthResponse(user=None)
    return AuthResponse(user=UserResponse.model_validate(user))
