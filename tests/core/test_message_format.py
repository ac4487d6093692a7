"""
Test suite for chat message formatting helpers.

Tests title derivation, context loading, prompt rendering and transport
formatting of stored chats.

System role: Verification of prompt and response shaping
"""

import json
import uuid
from datetime import datetime, timezone

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from studybuddy.boundary.db.models.chat_message_model import ChatMessageModel
from studybuddy.boundary.db.models.chat_model import ChatModel
from studybuddy.core.chat.chat_prompt import CHAT_PROMPT
from studybuddy.core.chat.message_format import (
    build_prompt_messages,
    derive_title,
    format_chat,
    load_context,
    metadata_dict,
    serialize_context,
    should_retitle,
    to_langchain_messages,
)
from studybuddy.models.chat import (
    ActionType,
    ActiveItem,
    ChatContext,
    IntentType,
    MessageMetadata,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _message(role: str, content: str, position: int = 0, metadata: dict | None = None) -> ChatMessageModel:
    return ChatMessageModel(
        id=uuid.uuid4(),
        chat_id=uuid.uuid4(),
        position=position,
        role=role,
        content=content,
        timestamp=NOW,
        message_metadata=metadata,
    )


class TestDeriveTitle:
    """Test suite for title derivation."""

    def test_long_message_is_truncated_with_ellipsis(self) -> None:
        title = derive_title("Can you help me understand photosynthesis in plants?")

        assert title == "Can you help me understand..."

    def test_exactly_five_words_gets_ellipsis(self) -> None:
        assert derive_title("one two three four five") == "one two three four five..."

    def test_short_message_is_kept(self) -> None:
        assert derive_title("Explain   mitosis") == "Explain mitosis"


class TestShouldRetitle:
    """Test suite for the retitle rule."""

    def test_default_title_early_in_chat(self) -> None:
        assert should_retitle("New Conversation", "New Conversation", 2) is True
        assert should_retitle("New Conversation", "New Conversation", 3) is True

    def test_not_after_three_messages(self) -> None:
        assert should_retitle("New Conversation", "New Conversation", 4) is False

    def test_custom_title_is_kept(self) -> None:
        assert should_retitle("Biology", "New Conversation", 1) is False


class TestLoadContext:
    """Test suite for reading stored context."""

    def test_empty_context(self) -> None:
        context = load_context(None)

        assert context == ChatContext()

    def test_malformed_active_items_are_dropped(self) -> None:
        context = load_context({
            "currentTopic": "Cells",
            "currentSubject": "Biology",
            "activeItems": [
                {"type": "quiz", "id": "q1"},
                {"type": "query", "id": "x"},
                {"type": "note"},
                "garbage",
                {"type": "note", "id": "n1"},
            ],
        })

        assert context.current_topic == "Cells"
        assert context.current_subject == "Biology"
        assert [(item.type, item.id) for item in context.active_items] == [
            (IntentType.QUIZ, "q1"),
            (IntentType.NOTE, "n1"),
        ]


class TestPromptRendering:
    """Test suite for building the LLM prompt."""

    def test_roles_are_mapped(self) -> None:
        converted = to_langchain_messages([
            _message("user", "hi"),
            _message("assistant", "hello"),
            _message("system", "note"),
        ])

        assert [type(m) for m in converted] == [HumanMessage, AIMessage, SystemMessage]

    def test_system_prompt_carries_context_and_history_follows(self) -> None:
        context = ChatContext(
            current_topic="Cells",
            active_items=[ActiveItem(type=IntentType.QUIZ, id="q1")],
        )
        history = [_message("user", "make a quiz"), _message("assistant", "done"), _message("user", "again")]

        messages = build_prompt_messages(CHAT_PROMPT, context, history)

        assert isinstance(messages[0], SystemMessage)
        assert '"currentTopic": "Cells"' in messages[0].content
        assert '"activeItems"' in messages[0].content
        assert [m.content for m in messages[1:]] == ["make a quiz", "done", "again"]
        assert isinstance(messages[-1], HumanMessage)

    def test_serialized_context_is_camel_case_json(self) -> None:
        parsed = json.loads(serialize_context(ChatContext(current_subject="Math")))

        assert parsed == {"currentTopic": None, "currentSubject": "Math", "activeItems": []}


class TestFormatChat:
    """Test suite for transport formatting."""

    def test_format_chat(self) -> None:
        chat = ChatModel(
            id=uuid.uuid4(),
            owner_id="user-1",
            title="Biology",
            context={"currentTopic": "Cells", "activeItems": [{"type": "quiz", "id": "q1"}]},
            created_at=NOW,
            updated_at=NOW,
        )
        messages = [
            _message("user", "quiz me", 0),
            _message(
                "assistant",
                "Here is a quiz",
                1,
                metadata={"type": "quiz", "action": "create", "referenceId": "q1"},
            ),
        ]

        response = format_chat(chat, messages)

        assert response.id == str(chat.id)
        assert response.created_at == NOW.isoformat()
        assert response.messages[0].metadata is None
        assert response.messages[1].metadata == MessageMetadata(
            type=IntentType.QUIZ, action=ActionType.CREATE, reference_id="q1"
        )
        assert response.context.active_items[0].id == "q1"

    def test_metadata_dict_uses_aliases(self) -> None:
        metadata = MessageMetadata(type=IntentType.NOTE, action=ActionType.UPDATE, reference_id="n1")

        assert metadata_dict(metadata) == {"type": "note", "action": "update", "referenceId": "n1"}
        assert metadata_dict(None) is None
