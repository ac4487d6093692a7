"""Tests for LangChain to Langfuse prompt conversion."""

import pytest
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder, PromptTemplate

from studybuddy.core.chat.chat_prompt import CHAT_PROMPT
from studybuddy.observability.prompt_registry.converter import (
    _convert_variables,
    convert_chat_template,
    convert_text_template,
)


class TestConvertVariables:
    """Tests for variable syntax conversion."""

    def test_single_variable(self) -> None:
        assert _convert_variables("Context: {context}") == "Context: {{context}}"

    def test_escaped_braces_become_literal(self) -> None:
        assert _convert_variables('{{"intent": {{}}}}') == '{"intent": {}}'

    def test_mixed_literal_json_and_variable(self) -> None:
        result = _convert_variables('Context:\n{context}\n{{ "type": "quiz" }}')

        assert result == 'Context:\n{{context}}\n{ "type": "quiz" }'

    def test_text_without_braces_is_unchanged(self) -> None:
        assert _convert_variables("Respond in JSON.") == "Respond in JSON."


class TestConvertChatTemplate:
    """Tests for chat template conversion."""

    def test_roles_and_placeholder(self) -> None:
        template = ChatPromptTemplate.from_messages([
            ("system", "Context: {context}"),
            MessagesPlaceholder("history"),
            ("human", "{question}"),
            ("ai", "Sure."),
        ])

        assert convert_chat_template(template) == [
            {"role": "system", "content": "Context: {{context}}"},
            {"type": "placeholder", "name": "history"},
            {"role": "user", "content": "{{question}}"},
            {"role": "assistant", "content": "Sure."},
        ]

    def test_chat_prompt_keeps_literal_json(self) -> None:
        system, placeholder = convert_chat_template(CHAT_PROMPT)

        assert "{{context}}" in system["content"]
        assert '"intent": {' in system["content"]
        assert "{{\n" not in system["content"]
        assert placeholder == {"type": "placeholder", "name": "history"}

    def test_unsupported_message_type(self) -> None:
        template = ChatPromptTemplate.from_messages([("system", "x")])
        template.messages.append(object())

        with pytest.raises(ValueError):
            convert_chat_template(template)


def test_convert_text_template() -> None:
    template = PromptTemplate.from_template("Summarize {topic} for {subject}")

    assert convert_text_template(template) == "Summarize {{topic}} for {{subject}}"
