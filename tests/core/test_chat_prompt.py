"""
Test suite for the study assistant chat prompt.

System role: Verification of prompt selection and registration
"""

from unittest.mock import MagicMock, patch

from langchain_core.prompts import ChatPromptTemplate

from studybuddy.core.chat.chat_prompt import (
    CHAT_PROMPT,
    CHAT_PROMPT_NAME,
    get_chat_prompt,
    register_chat_prompt,
)


class TestChatPrompt:
    """Test suite for the local template."""

    def test_input_variables(self) -> None:
        assert set(CHAT_PROMPT.input_variables) == {"context", "history"}

    def test_json_structure_is_rendered_literally(self) -> None:
        messages = CHAT_PROMPT.format_messages(context="{}", history=[])

        assert '"intent": {' in messages[0].content
        assert '"studyPlan": {' in messages[0].content


class TestGetChatPrompt:
    """Test suite for prompt selection."""

    def test_local_template_by_default(self) -> None:
        assert get_chat_prompt() is CHAT_PROMPT

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_registry_prompt_is_preferred(self, mock_registry_cls: MagicMock) -> None:
        remote = ChatPromptTemplate.from_messages([("system", "remote {context}")])
        registry = mock_registry_cls.return_value
        registry.is_enabled = True
        registry.get_langchain_prompt.return_value = remote

        prompt = get_chat_prompt(use_registry=True, label="production")

        assert prompt is remote
        registry.get_langchain_prompt.assert_called_once_with(CHAT_PROMPT_NAME, label="production")

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_missing_registry_prompt_falls_back(self, mock_registry_cls: MagicMock) -> None:
        registry = mock_registry_cls.return_value
        registry.is_enabled = True
        registry.get_langchain_prompt.return_value = None

        assert get_chat_prompt(use_registry=True) is CHAT_PROMPT

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_registry_error_falls_back(self, mock_registry_cls: MagicMock) -> None:
        registry = mock_registry_cls.return_value
        registry.is_enabled = True
        registry.get_langchain_prompt.side_effect = ConnectionError("langfuse unreachable")

        assert get_chat_prompt(use_registry=True) is CHAT_PROMPT

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_disabled_registry_uses_local(self, mock_registry_cls: MagicMock) -> None:
        mock_registry_cls.return_value.is_enabled = False

        assert get_chat_prompt(use_registry=True) is CHAT_PROMPT
        mock_registry_cls.return_value.get_langchain_prompt.assert_not_called()


class TestRegisterChatPrompt:
    """Test suite for prompt registration."""

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_registers_with_model_config(self, mock_registry_cls: MagicMock) -> None:
        registry = mock_registry_cls.return_value
        registry.is_enabled = True

        register_chat_prompt("gpt-35-turbo", temperature=0.7, max_tokens=800)

        kwargs = registry.register_prompt.call_args.kwargs
        assert kwargs["name"] == CHAT_PROMPT_NAME
        assert kwargs["template"] is CHAT_PROMPT
        assert kwargs["config"].model == "gpt-35-turbo"
        assert kwargs["labels"] == ["development"]

    @patch("studybuddy.core.chat.chat_prompt.PromptRegistry")
    def test_skips_when_disabled(self, mock_registry_cls: MagicMock) -> None:
        mock_registry_cls.return_value.is_enabled = False

        register_chat_prompt("gpt-35-turbo")

        mock_registry_cls.return_value.register_prompt.assert_not_called()
