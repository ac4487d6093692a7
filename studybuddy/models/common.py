"""
Common schema building blocks.

Dependencies: pydantic
System role: Shared base model and generic responses
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing camelCase on the wire.

    Python code uses snake_case attributes; JSON bodies and responses use
    the camelCase aliases. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(description="Human-readable confirmation")


def ensure_utc(value: datetime | None) -> datetime | None:
    """Timezone-aware UTC datetime; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
