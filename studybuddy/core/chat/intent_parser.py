"""
Intent and document parser.

Turns the gateway's raw completion into a validated ParsedTurn. Never
raises on bad model output: malformed replies and gateway failures both
degrade to a plain query turn carrying a canned apology.

Dependencies: pydantic, studybuddy.core.chat
System role: Classification step of the chat turn pipeline
"""

import json
import logging
import re
from typing import Any, Sequence

from langchain_core.messages import BaseMessage
from pydantic import ValidationError

from studybuddy.core.chat.llm_gateway import LLMGateway
from studybuddy.core.chat.turn_schema import (
    DOCUMENT_KEYS,
    PAYLOAD_TYPES,
    AssistantMessage,
    Intent,
    ParsedTurn,
)
from studybuddy.core.exceptions import LLMGatewayError
from studybuddy.models.chat import ActionType, IntentType, MessageMetadata

logger = logging.getLogger(__name__)

PARSE_FALLBACK_MESSAGE = (
    "I apologize, but I encountered an error processing your request. "
    "Could you please rephrase your question?"
)
CONNECTION_FALLBACK_MESSAGE = (
    "I apologize, but I'm having trouble connecting to my knowledge base right now. "
    "Please try again in a moment."
)

_CODE_FENCE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?```$", re.DOTALL)


def fallback_turn(content: str = PARSE_FALLBACK_MESSAGE) -> ParsedTurn:
    """Plain query turn with no document and no metadata."""
    return ParsedTurn(
        intent=Intent(type=IntentType.QUERY),
        message=AssistantMessage(content=content),
    )


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1).strip() if match else stripped


def derive_metadata(intent: Intent) -> MessageMetadata | None:
    """Message metadata implied by the intent; None for query turns."""
    if not intent.type.is_document:
        return None
    return MessageMetadata(type=intent.type, action=intent.action or ActionType.CREATE)


class IntentParser:
    """
    Classify a turn through the LLM gateway.

    Example:
        >>> parser = IntentParser(gateway)
        >>> turn = await parser.parse(prompt_messages)
        >>> turn.intent.type
        <IntentType.QUIZ: 'quiz'>
    """

    def __init__(self, gateway: LLMGateway) -> None:
        self._gateway = gateway

    async def parse(self, messages: Sequence[BaseMessage]) -> ParsedTurn:
        """
        Call the gateway once and parse its reply.

        Args:
            messages: Rendered prompt (system instruction, history, user message)

        Returns:
            ParsedTurn; a fallback turn when the gateway fails or the reply is unusable
        """
        try:
            raw = await self._gateway.complete(messages)
        except LLMGatewayError as e:
            logger.error("Gateway call failed, using connection fallback", extra={"error": str(e)})
            return fallback_turn(CONNECTION_FALLBACK_MESSAGE)

        return self.parse_text(raw)

    def parse_text(self, raw: str) -> ParsedTurn:
        """
        Parse one raw completion.

        Args:
            raw: Assistant text expected to hold a single JSON object

        Returns:
            ParsedTurn, or the parse fallback when intent or message is unusable
        """
        try:
            payload = json.loads(strip_code_fence(raw))
        except json.JSONDecodeError:
            logger.warning("LLM reply is not valid JSON", extra={"raw": raw[:500]})
            return fallback_turn()

        if not isinstance(payload, dict):
            logger.warning("LLM reply is not a JSON object", extra={"raw": raw[:500]})
            return fallback_turn()

        raw_message = payload.get("message")
        content = raw_message.get("content") if isinstance(raw_message, dict) else None

        try:
            intent = Intent.model_validate(payload.get("intent"))
            # The model's own metadata is discarded and re-derived below
            message = AssistantMessage.model_validate({"content": content})
        except ValidationError as e:
            logger.warning(
                "LLM reply missing a valid intent or message",
                extra={"errors": e.error_count()},
            )
            return fallback_turn()

        message.metadata = derive_metadata(intent)
        document = self._extract_document(intent, payload.get("document"))

        return ParsedTurn(intent=intent, message=message, document=document)

    def _extract_document(self, intent: Intent, envelope: Any) -> Any:
        """
        Pick and validate the document variant matching the intent.

        Returns:
            QuizPayload, StudyPlanPayload or NotePayload, or None when absent,
            mismatched or invalid
        """
        if not isinstance(envelope, dict) or not envelope:
            return None

        if not intent.type.is_document or intent.action == ActionType.DELETE:
            logger.debug("Ignoring document on a %s turn", intent.type.value)
            return None

        populated = {
            DOCUMENT_KEYS[key]: value
            for key, value in envelope.items()
            if key in DOCUMENT_KEYS and value
        }
        if intent.type not in populated:
            if populated:
                logger.warning(
                    "Document variant does not match intent, dropping document",
                    extra={
                        "intent_type": intent.type.value,
                        "variants": [t.value for t in populated],
                    },
                )
            return None

        try:
            return PAYLOAD_TYPES[intent.type].model_validate(populated[intent.type])
        except ValidationError as e:
            logger.warning(
                "Document failed validation, dropping document",
                extra={"intent_type": intent.type.value, "errors": e.error_count()},
            )
            return None
