"""
Chat message CRUD operations.

Append-only message log scoped to a chat. Positions are assigned from the
current message count, so ordering is append order.

Dependencies: sqlalchemy, studybuddy.boundary.db.models
System role: Chat message persistence
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.base import utc_now
from studybuddy.boundary.db.models.chat_message_model import ChatMessageModel
from studybuddy.boundary.db.CRUD.base_crud import BaseCRUD


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        """Initialize ChatMessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def count_by_chat(self, session: AsyncSession, chat_id: UUID) -> int:
        """Number of messages stored for a chat."""
        stmt = select(func.count()).select_from(ChatMessageModel).where(
            ChatMessageModel.chat_id == chat_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def append(
        self,
        session: AsyncSession,
        chat_id: UUID,
        role: str,
        content: str,
        metadata: dict | None = None,
        timestamp: datetime | None = None,
    ) -> ChatMessageModel:
        """
        Append a message at the end of a chat.

        Args:
            session: Async database session
            chat_id: Parent chat UUID
            role: user, assistant or system
            content: Message text
            metadata: Optional {type, action, referenceId}
            timestamp: Append time (defaults to now, UTC)

        Returns:
            Created ChatMessageModel
        """
        position = await self.count_by_chat(session, chat_id)
        return await self.create(
            session,
            chat_id=chat_id,
            position=position,
            role=role,
            content=content,
            message_metadata=metadata,
            timestamp=timestamp or utc_now(),
        )

    async def get_by_chat(
        self,
        session: AsyncSession,
        chat_id: UUID,
        limit: int | None = None,
    ) -> Sequence[ChatMessageModel]:
        """
        Retrieve a chat's messages in append order.

        Args:
            session: Async database session
            chat_id: Parent chat UUID
            limit: Only the most recent ``limit`` messages when set

        Returns:
            Messages ordered oldest to newest
        """
        if limit is None:
            stmt = (
                select(ChatMessageModel)
                .where(ChatMessageModel.chat_id == chat_id)
                .order_by(ChatMessageModel.position.asc())
            )
            result = await session.execute(stmt)
            return result.scalars().all()

        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.chat_id == chat_id)
            .order_by(ChatMessageModel.position.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def delete_by_chat(self, session: AsyncSession, chat_id: UUID) -> int:
        """Delete all messages of a chat and return how many were removed."""
        stmt = delete(ChatMessageModel).where(ChatMessageModel.chat_id == chat_id)
        result = await session.execute(stmt)
        return result.rowcount


chat_message_crud = ChatMessageCRUD()
