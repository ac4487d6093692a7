"""
Chat turn pipeline.

Gateway, prompt, parser, active item tracking and message formatting used
by the chat service to process one user message.
"""

from studybuddy.core.chat.active_items import next_active_items
from studybuddy.core.chat.chat_prompt import get_chat_prompt, register_chat_prompt
from studybuddy.core.chat.intent_parser import (
    CONNECTION_FALLBACK_MESSAGE,
    PARSE_FALLBACK_MESSAGE,
    IntentParser,
)
from studybuddy.core.chat.llm_gateway import LLMGateway
from studybuddy.core.chat.turn_schema import ParsedTurn

__all__ = [
    "LLMGateway",
    "IntentParser",
    "ParsedTurn",
    "next_active_items",
    "get_chat_prompt",
    "register_chat_prompt",
    "PARSE_FALLBACK_MESSAGE",
    "CONNECTION_FALLBACK_MESSAGE",
]
