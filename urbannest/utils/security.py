"""
Password hashing and session token helpers.
"""

from passlib.context import CryptContext
import hashlib
import secrets


# Password hashing context, bcrypt work factor 10
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

SESSION_TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt hash
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def generate_session_token() -> str:
    """Mint a new opaque session token for the client's cookie."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a session token; only this is persisted."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
