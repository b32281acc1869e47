"""
Small parsing helpers shared by services.
"""

from typing import Optional
import uuid


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """
    Parse a path identifier.

    Args:
        value: Raw identifier from the URL

    Returns:
        UUID, or None when the value is not a valid UUID
    """
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None
