"""
Chat CRUD operations.

Provides owner-scoped operations for ChatModel, including the validated
context write used at the end of every chat turn.

Dependencies: sqlalchemy, pydantic, studybuddy.boundary.db.models
System role: Chat persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.base import utc_now
from studybuddy.boundary.db.models.chat_model import ChatModel
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD
from studybuddy.models.chat import ChatContext


class ChatCRUD(OwnedCRUD[ChatModel]):
    """
    CRUD operations for ChatModel.

    Context is always written through ``save_turn_state`` so that what
    lands in the JSON column has passed ChatContext validation.
    """

    def __init__(self) -> None:
        """Initialize ChatCRUD with ChatModel."""
        super().__init__(ChatModel)

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ChatModel]:
        """
        List an owner's chats, most recently active first.

        Args:
            session: Async database session
            owner_id: Owning user
            limit: Maximum number of chats to return
            offset: Number of chats to skip

        Returns:
            Sequence of ChatModels ordered by updated_at descending
        """
        stmt = (
            select(ChatModel)
            .where(ChatModel.owner_id == owner_id)
            .order_by(ChatModel.updated_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def save_turn_state(
        self,
        session: AsyncSession,
        chat: ChatModel,
        context: dict,
        title: str,
    ) -> ChatModel:
        """
        Persist a chat's context and title after a turn.

        Args:
            session: Async database session
            chat: Loaded chat instance
            context: Context in wire shape ({currentTopic, currentSubject, activeItems})
            title: Chat title

        Returns:
            Updated ChatModel

        Raises:
            pydantic.ValidationError: If the context does not validate; nothing is written
        """
        validated = ChatContext.model_validate(context)
        return await self.apply_updates(
            session,
            chat,
            context=validated.model_dump(mode="json", by_alias=True),
            title=title,
            updated_at=utc_now(),
        )


chat_crud = ChatCRUD()
