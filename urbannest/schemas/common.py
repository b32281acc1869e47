"""
Shared pydantic configuration for request and response schemas.
Field names travel as camelCase on the wire and snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema: camelCase aliases, accepts either naming, reads ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def require_text(value, field_name: str):
    """Reject missing or whitespace-only text and return it trimmed."""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()
