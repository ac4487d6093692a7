"""
Note domain models and schemas.

Dependencies: pydantic
System role: Note API contracts and chat-generated note payload fields
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from studybuddy.models.common import CamelModel


class NoteFields(CamelModel):
    """Editable note fields shared by requests, responses and chat payloads."""

    title: str = Field(min_length=1, max_length=255)
    content: str
    tags: list[str] = Field(default_factory=list)

    def to_store_fields(self) -> dict[str, Any]:
        """Column values for NoteModel."""
        return {"title": self.title, "content": self.content, "tags": list(self.tags)}


class CreateNoteRequest(NoteFields):
    """Request schema for creating a note."""


class UpdateNoteRequest(CamelModel):
    """Request schema for updating a note; omitted fields are left as-is."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    tags: list[str] | None = None

    def to_store_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NoteResponse(NoteFields):
    """Response schema for note operations."""

    id: str
    created_at: datetime
    updated_at: datetime
