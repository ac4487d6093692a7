"""
LangChain to Langfuse prompt converter.

Converts a LangChain ChatPromptTemplate into Langfuse chat messages:
variables move from {var} to {{var}}, escaped literal braces are unescaped,
and MessagesPlaceholder entries become Langfuse placeholder messages.

Dependencies: langchain_core.prompts
System role: Template format conversion for prompt registry
"""

import re
from typing import TypedDict

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder, PromptTemplate
from langchain_core.prompts.chat import (
    AIMessagePromptTemplate,
    HumanMessagePromptTemplate,
    SystemMessagePromptTemplate,
)


class LangfuseMessage(TypedDict):
    """Langfuse chat message format."""

    role: str
    content: str


class LangfusePlaceholder(TypedDict):
    """Langfuse message-list placeholder."""

    type: str
    name: str


# Escaped literal braces first, then single-brace variables
_TOKEN_PATTERN = re.compile(r"\{\{|\}\}|\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _convert_variables(content: str) -> str:
    """
    Convert LangChain template syntax to Langfuse format.

    ``{var}`` becomes ``{{var}}``; ``{{`` and ``}}`` (literal braces in
    LangChain f-string templates) become ``{`` and ``}``.

    Args:
        content: Template string in LangChain f-string syntax

    Returns:
        str: Template string with Langfuse variables
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        return "{{" + match.group(1) + "}}"

    return _TOKEN_PATTERN.sub(_replace, content)


def _get_role_from_message(message: object) -> str:
    """
    Extract the Langfuse role from a LangChain message template.

    Raises:
        ValueError: If message type is unsupported
    """
    if isinstance(message, SystemMessagePromptTemplate):
        return "system"
    if isinstance(message, HumanMessagePromptTemplate):
        return "user"
    if isinstance(message, AIMessagePromptTemplate):
        return "assistant"
    raise ValueError(f"Unsupported message type: {type(message)}")


def convert_chat_template(
    template: ChatPromptTemplate,
) -> list[LangfuseMessage | LangfusePlaceholder]:
    """
    Convert LangChain ChatPromptTemplate to Langfuse message format.

    Args:
        template: LangChain ChatPromptTemplate instance

    Returns:
        Langfuse chat messages and placeholders in template order

    Raises:
        ValueError: If template contains unsupported message types

    Example:
        >>> template = ChatPromptTemplate.from_messages([
        ...     ("system", "Context: {context}"),
        ...     MessagesPlaceholder("history"),
        ... ])
        >>> convert_chat_template(template)
        [{'role': 'system', 'content': 'Context: {{context}}'}, {'type': 'placeholder', 'name': 'history'}]
    """
    messages: list[LangfuseMessage | LangfusePlaceholder] = []

    for msg in template.messages:
        if isinstance(msg, MessagesPlaceholder):
            messages.append(LangfusePlaceholder(type="placeholder", name=msg.variable_name))
            continue

        role = _get_role_from_message(msg)
        content = _convert_variables(str(msg.prompt.template))
        messages.append(LangfuseMessage(role=role, content=content))

    return messages


def convert_text_template(template: PromptTemplate) -> str:
    """Convert LangChain PromptTemplate to Langfuse text format."""
    return _convert_variables(template.template)
