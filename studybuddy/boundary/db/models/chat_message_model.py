"""
Chat message ORM model.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Append-only message log per chat
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.boundary.db.base import Base, UUIDMixin, utc_now


class ChatMessageModel(Base, UUIDMixin):
    """
    Single chat message.

    Messages are never edited after insert. ``position`` is the append
    index within the chat and the only ordering guarantee.

    Attributes:
        chat_id: Parent chat (cascade delete)
        position: Zero-based append index
        role: user, assistant or system
        content: Message text
        timestamp: When the message was appended (UTC)
        message_metadata: {type, action, referenceId} on assistant messages that touched a document
    """

    __tablename__ = "chat_messages"

    chat_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    message_metadata: Mapped[dict | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
    )
