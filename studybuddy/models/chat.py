"""
Chat domain models and schemas.

Intent/action vocabulary, conversation context, and request/response
schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts and context shape
"""

import uuid
from enum import Enum

from pydantic import Field, field_validator

from studybuddy.models.common import CamelModel


class IntentType(str, Enum):
    """Classified purpose of a chat turn."""

    QUERY = "query"
    QUIZ = "quiz"
    STUDY_PLAN = "study_plan"
    NOTE = "note"

    @property
    def is_document(self) -> bool:
        """True for intents that map to a stored document type."""
        return self is not IntentType.QUERY


class ActionType(str, Enum):
    """Document operation requested by a turn."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ActiveItem(CamelModel):
    """Pointer to a document a chat can refer back to ("update that quiz")."""

    type: IntentType
    id: str = Field(min_length=1)

    @field_validator("type")
    @classmethod
    def _document_types_only(cls, value: IntentType) -> IntentType:
        if not value.is_document:
            raise ValueError("active items must reference a quiz, study_plan or note")
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value


class ChatContext(CamelModel):
    """Per-chat scratch state carried across turns."""

    current_topic: str | None = None
    current_subject: str | None = None
    active_items: list[ActiveItem] = Field(default_factory=list)


class MessageMetadata(CamelModel):
    """Link from an assistant message to the document its turn created or updated."""

    type: IntentType
    action: ActionType
    reference_id: str | None = None


class CreateChatRequest(CamelModel):
    """Request schema for creating a chat."""

    title: str | None = Field(default=None, max_length=255, description="Optional title")


class UpdateChatRequest(CamelModel):
    """Request schema for renaming a chat."""

    title: str = Field(min_length=1, max_length=255, description="New chat title")


class SendMessageRequest(CamelModel):
    """Request schema for a chat turn."""

    content: str = Field(default="", description="User message text")


class ChatMessageResponse(CamelModel):
    """Single chat message formatted for transport."""

    id: str
    role: str = Field(description="Message role: 'user', 'assistant' or 'system'")
    content: str
    timestamp: str = Field(description="ISO-8601 timestamp")
    metadata: MessageMetadata | None = None


class ChatResponse(CamelModel):
    """Full chat transcript."""

    id: str
    title: str
    messages: list[ChatMessageResponse]
    context: ChatContext
    created_at: str
    updated_at: str
