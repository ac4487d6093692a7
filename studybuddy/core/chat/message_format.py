"""
Chat message formatting helpers.

Builds the LLM prompt from stored messages and context, derives chat
titles, and shapes chats for transport.

Dependencies: langchain_core, studybuddy.boundary.db.models, studybuddy.models
System role: Conversions between stored chats, prompts and API responses
"""

import json
from datetime import datetime
from typing import Any, Iterable, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate

from studybuddy.boundary.db.models.chat_message_model import ChatMessageModel
from studybuddy.boundary.db.models.chat_model import ChatModel
from studybuddy.core.chat.active_items import clean_active_items
from studybuddy.models.chat import (
    ChatContext,
    ChatMessageResponse,
    ChatResponse,
    MessageMetadata,
)

TITLE_WORDS = 5
TITLE_MAX_MESSAGES = 3

_ROLE_TO_MESSAGE: dict[str, type[BaseMessage]] = {
    "user": HumanMessage,
    "assistant": AIMessage,
    "system": SystemMessage,
}


def to_langchain_messages(messages: Iterable[ChatMessageModel]) -> list[BaseMessage]:
    """Stored messages as LangChain messages, unknown roles skipped."""
    converted: list[BaseMessage] = []
    for message in messages:
        message_cls = _ROLE_TO_MESSAGE.get(message.role)
        if message_cls is not None:
            converted.append(message_cls(content=message.content))
    return converted


def load_context(raw: dict | None) -> ChatContext:
    """
    Read a stored context column, tolerating malformed active items.

    Args:
        raw: JSON context as stored on the chat row

    Returns:
        ChatContext with only valid active items
    """
    raw = raw or {}
    return ChatContext(
        current_topic=raw.get("currentTopic"),
        current_subject=raw.get("currentSubject"),
        active_items=clean_active_items(raw.get("activeItems")),
    )


def serialize_context(context: ChatContext) -> str:
    """Context as indented camelCase JSON for the system prompt."""
    return json.dumps(context.model_dump(mode="json", by_alias=True), indent=2)


def build_prompt_messages(
    prompt: ChatPromptTemplate,
    context: ChatContext,
    history: Sequence[ChatMessageModel],
) -> list[BaseMessage]:
    """
    Render the prompt for one turn.

    Args:
        prompt: Template with ``context`` and ``history`` variables
        context: Chat context before the turn
        history: Most recent messages, the new user message last

    Returns:
        System instruction followed by the history messages
    """
    return prompt.format_messages(
        context=serialize_context(context),
        history=to_langchain_messages(history),
    )


def derive_title(content: str) -> str:
    """
    Title from the first words of a message.

    Example:
        >>> derive_title("Can you help me understand photosynthesis in plants?")
        'Can you help me understand...'
    """
    words = content.split()[:TITLE_WORDS]
    title = " ".join(words)
    if len(words) >= TITLE_WORDS:
        title += "..."
    return title


def should_retitle(title: str, default_title: str, message_count: int) -> bool:
    """True while a chat still has its default title and at most three messages."""
    return title == default_title and message_count <= TITLE_MAX_MESSAGES


def _isoformat(value: datetime) -> str:
    return value.isoformat()


def format_message(message: ChatMessageModel) -> ChatMessageResponse:
    """Stored message shaped for transport."""
    metadata = (
        MessageMetadata.model_validate(message.message_metadata)
        if message.message_metadata
        else None
    )
    return ChatMessageResponse(
        id=str(message.id),
        role=message.role,
        content=message.content,
        timestamp=_isoformat(message.timestamp),
        metadata=metadata,
    )


def format_chat(chat: ChatModel, messages: Sequence[ChatMessageModel]) -> ChatResponse:
    """
    Full chat transcript shaped for transport.

    Args:
        chat: Chat row
        messages: All messages of the chat in append order

    Returns:
        ChatResponse with string ids and ISO-8601 timestamps
    """
    return ChatResponse(
        id=str(chat.id),
        title=chat.title,
        messages=[format_message(message) for message in messages],
        context=load_context(chat.context),
        created_at=_isoformat(chat.created_at),
        updated_at=_isoformat(chat.updated_at),
    )


def metadata_dict(metadata: MessageMetadata | None) -> dict[str, Any] | None:
    """Metadata in the camelCase shape stored on the message row."""
    if metadata is None:
        return None
    return metadata.model_dump(mode="json", by_alias=True)
