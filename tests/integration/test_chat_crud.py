"""
Integration tests for chat and chat message CRUD operations.

Uses in-memory SQLite (aiosqlite) for fast, isolated tests.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.CRUD.chat_crud import chat_crud
from studybuddy.boundary.db.CRUD.chat_message_crud import chat_message_crud


@pytest.fixture
async def chat(test_async_db: AsyncSession, owner_id: str):
    """Create a chat with an empty context."""
    chat = await chat_crud.create_for_owner(test_async_db, owner_id, title="New Conversation", context={})
    await test_async_db.commit()
    return chat


class TestChatMessageCRUD:
    """Tests for the append-only message log."""

    @pytest.mark.asyncio
    async def test_append_assigns_positions(self, test_async_db: AsyncSession, chat) -> None:
        for i in range(3):
            await chat_message_crud.append(test_async_db, chat.id, "user", f"m{i}")

        messages = await chat_message_crud.get_by_chat(test_async_db, chat.id)

        assert [(m.position, m.content) for m in messages] == [(0, "m0"), (1, "m1"), (2, "m2")]

    @pytest.mark.asyncio
    async def test_limit_returns_latest_in_order(self, test_async_db: AsyncSession, chat) -> None:
        for i in range(6):
            await chat_message_crud.append(test_async_db, chat.id, "user", f"m{i}")

        messages = await chat_message_crud.get_by_chat(test_async_db, chat.id, limit=4)

        assert [m.content for m in messages] == ["m2", "m3", "m4", "m5"]

    @pytest.mark.asyncio
    async def test_metadata_is_stored(self, test_async_db: AsyncSession, chat) -> None:
        metadata = {"type": "quiz", "action": "create", "referenceId": "q1"}

        await chat_message_crud.append(test_async_db, chat.id, "assistant", "ok", metadata=metadata)

        (message,) = await chat_message_crud.get_by_chat(test_async_db, chat.id)
        assert message.message_metadata == metadata

    @pytest.mark.asyncio
    async def test_delete_by_chat(self, test_async_db: AsyncSession, chat) -> None:
        await chat_message_crud.append(test_async_db, chat.id, "user", "a")
        await chat_message_crud.append(test_async_db, chat.id, "assistant", "b")

        assert await chat_message_crud.delete_by_chat(test_async_db, chat.id) == 2
        assert await chat_message_crud.count_by_chat(test_async_db, chat.id) == 0


class TestChatCRUD:
    """Tests for chat persistence."""

    @pytest.mark.asyncio
    async def test_save_turn_state_writes_camel_case(self, test_async_db: AsyncSession, chat) -> None:
        context = {
            "currentTopic": "Cells",
            "currentSubject": None,
            "activeItems": [{"type": "note", "id": "n1"}],
        }

        saved = await chat_crud.save_turn_state(test_async_db, chat, context, "Cells")

        assert saved.title == "Cells"
        assert saved.context == context

    @pytest.mark.asyncio
    async def test_save_turn_state_rejects_invalid_context(self, test_async_db: AsyncSession, chat) -> None:
        context = {"activeItems": [{"type": "query", "id": "x"}]}

        with pytest.raises(PydanticValidationError):
            await chat_crud.save_turn_state(test_async_db, chat, context, "Broken")

        assert chat.title == "New Conversation"
        assert chat.context == {}

    @pytest.mark.asyncio
    async def test_owner_scoping(self, test_async_db: AsyncSession, chat, owner_id: str) -> None:
        assert await chat_crud.get_for_owner(test_async_db, chat.id, owner_id) is not None
        assert await chat_crud.get_for_owner(test_async_db, chat.id, "intruder") is None
        assert await chat_crud.delete_for_owner(test_async_db, chat.id, "intruder") is False
