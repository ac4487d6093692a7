"""
Test suite for IntentParser.

Tests JSON envelope parsing, fallbacks for malformed replies and gateway
failures, metadata re-derivation and document variant selection.

System role: Verification of chat turn classification
"""

import json
from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import HumanMessage

from studybuddy.core.chat.intent_parser import (
    CONNECTION_FALLBACK_MESSAGE,
    PARSE_FALLBACK_MESSAGE,
    IntentParser,
    strip_code_fence,
)
from studybuddy.core.chat.turn_schema import NotePayload, QuizPayload, StudyPlanPayload
from studybuddy.core.exceptions import LLMGatewayError
from studybuddy.models.chat import ActionType, IntentType


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Provide mock LLM gateway."""
    return AsyncMock()


@pytest.fixture
def parser(mock_gateway: AsyncMock) -> IntentParser:
    """Provide IntentParser over the mock gateway."""
    return IntentParser(mock_gateway)


class TestParseSuccess:
    """Test suite for well-formed replies."""

    def test_query_reply(self, parser: IntentParser, make_reply) -> None:
        turn = parser.parse_text(make_reply(content="Mitosis has four phases.", topic="Mitosis"))

        assert turn.intent.type == IntentType.QUERY
        assert turn.intent.action is None
        assert turn.intent.topic == "Mitosis"
        assert turn.message.content == "Mitosis has four phases."
        assert turn.message.metadata is None
        assert turn.document is None

    def test_quiz_create_reply(self, parser: IntentParser, make_reply, sample_quiz_document) -> None:
        turn = parser.parse_text(make_reply("quiz", "create", document=sample_quiz_document))

        assert isinstance(turn.document, QuizPayload)
        assert turn.document.title == "Photosynthesis Basics"
        assert turn.document.questions[0].options[0].is_correct is True
        assert turn.message.metadata.type == IntentType.QUIZ
        assert turn.message.metadata.action == ActionType.CREATE

    def test_study_plan_reply(
        self, parser: IntentParser, make_reply, sample_study_plan_document
    ) -> None:
        turn = parser.parse_text(
            make_reply("study_plan", "create", document=sample_study_plan_document)
        )

        assert isinstance(turn.document, StudyPlanPayload)
        assert len(turn.document.topics) == 2
        assert turn.document.start_date.year == 2024

    def test_note_reply(self, parser: IntentParser, make_reply, sample_note_document) -> None:
        turn = parser.parse_text(make_reply("note", "create", document=sample_note_document))

        assert isinstance(turn.document, NotePayload)
        assert turn.document.tags == ["biology", "metabolism"]

    def test_code_fenced_reply(self, parser: IntentParser, make_reply) -> None:
        raw = "```json\n" + make_reply(content="Fenced") + "\n```"

        turn = parser.parse_text(raw)

        assert turn.message.content == "Fenced"

    def test_missing_action_defaults_metadata_to_create(
        self, parser: IntentParser, sample_note_document
    ) -> None:
        raw = json.dumps({
            "intent": {"type": "note"},
            "message": {"content": "Saved."},
            "document": sample_note_document,
        })

        turn = parser.parse_text(raw)

        assert turn.intent.action is None
        assert turn.message.metadata.action == ActionType.CREATE

    def test_model_metadata_is_replaced(self, parser: IntentParser) -> None:
        raw = json.dumps({
            "intent": {"type": "quiz", "action": "update"},
            "message": {
                "content": "Updated.",
                "metadata": {"type": "note", "action": "delete", "referenceId": "bogus"},
            },
        })

        turn = parser.parse_text(raw)

        assert turn.message.metadata.type == IntentType.QUIZ
        assert turn.message.metadata.action == ActionType.UPDATE
        assert turn.message.metadata.reference_id is None


class TestParseFallback:
    """Test suite for unusable replies."""

    @pytest.mark.parametrize(
        "raw",
        [
            "Sure! Here is your quiz.",
            "[1, 2, 3]",
            json.dumps({"message": {"content": "no intent"}}),
            json.dumps({"intent": {"type": "quiz"}}),
            json.dumps({"intent": {"type": "flashcards"}, "message": {"content": "x"}}),
            json.dumps({"intent": {"type": "quiz"}, "message": "plain string"}),
        ],
    )
    def test_should_return_parse_fallback(self, parser: IntentParser, raw: str) -> None:
        turn = parser.parse_text(raw)

        assert turn.intent.type == IntentType.QUERY
        assert turn.intent.action is None
        assert turn.message.content == PARSE_FALLBACK_MESSAGE
        assert turn.message.metadata is None
        assert turn.document is None


class TestDocumentSelection:
    """Test suite for document variant handling."""

    def test_mismatched_variant_is_dropped(
        self, parser: IntentParser, make_reply, sample_note_document
    ) -> None:
        turn = parser.parse_text(make_reply("quiz", "create", document=sample_note_document))

        assert turn.intent.type == IntentType.QUIZ
        assert turn.document is None
        assert turn.message.content == "Here you go."

    def test_invalid_variant_is_dropped(self, parser: IntentParser, make_reply) -> None:
        document = {"quiz": {"description": "no title", "questions": []}}

        turn = parser.parse_text(make_reply("quiz", "create", document=document))

        assert turn.document is None
        assert turn.intent.type == IntentType.QUIZ

    def test_matching_variant_is_chosen_among_several(
        self, parser: IntentParser, make_reply, sample_quiz_document, sample_note_document
    ) -> None:
        document = {**sample_note_document, **sample_quiz_document}

        turn = parser.parse_text(make_reply("note", "create", document=document))

        assert isinstance(turn.document, NotePayload)

    def test_document_on_query_is_dropped(
        self, parser: IntentParser, make_reply, sample_quiz_document
    ) -> None:
        turn = parser.parse_text(make_reply("query", document=sample_quiz_document))

        assert turn.document is None

    def test_document_on_delete_is_dropped(
        self, parser: IntentParser, make_reply, sample_quiz_document
    ) -> None:
        turn = parser.parse_text(make_reply("quiz", "delete", document=sample_quiz_document))

        assert turn.document is None
        assert turn.intent.action == ActionType.DELETE


class TestParseWithGateway:
    """Test suite for the gateway call."""

    @pytest.mark.asyncio
    async def test_parse_should_call_gateway_once(
        self, parser: IntentParser, mock_gateway: AsyncMock, make_reply
    ) -> None:
        mock_gateway.complete.return_value = make_reply(content="Hello")
        messages = [HumanMessage(content="hi")]

        turn = await parser.parse(messages)

        mock_gateway.complete.assert_awaited_once_with(messages)
        assert turn.message.content == "Hello"

    @pytest.mark.asyncio
    async def test_gateway_error_returns_connection_fallback(
        self, parser: IntentParser, mock_gateway: AsyncMock
    ) -> None:
        mock_gateway.complete.side_effect = LLMGatewayError("down", provider="azure_openai")

        turn = await parser.parse([HumanMessage(content="hi")])

        assert turn.intent.type == IntentType.QUERY
        assert turn.message.content == CONNECTION_FALLBACK_MESSAGE
        assert turn.document is None


class TestStripCodeFence:
    """Test suite for strip_code_fence."""

    def test_plain_text_unchanged(self) -> None:
        assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'

    def test_fence_without_language(self) -> None:
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
