"""
Chat ORM model.

Represents a user-owned conversation and its running context.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Chat persistence for the turn orchestrator
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.boundary.db.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class ChatModel(Base, UUIDMixin, TimestampMixin, OwnedMixin):
    """
    Chat ORM model.

    Messages live in ``chat_messages`` and are read and appended through
    ChatMessageCRUD so the async session never lazy-loads a collection.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Owning user
        title: Display title, derived from the first user message
        context: JSON context ({currentTopic, currentSubject, activeItems})
        created_at: Chat creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "chats"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Chat title",
    )

    context: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Running conversation context (topic, subject, active items)",
    )
