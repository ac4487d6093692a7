"""
Langfuse prompt registry for versioned prompt management.

Singleton registry that creates prompt versions in Langfuse from LangChain
templates and fetches them back as LangChain templates.

Dependencies: langfuse, studybuddy.configs, studybuddy.observability.prompt_registry
System role: Prompt version control and retrieval
"""

import logging
from typing import Any

from langchain_core.prompts import ChatPromptTemplate, PromptTemplate
from langfuse import Langfuse

from studybuddy.configs import get_settings
from studybuddy.observability.prompt_registry.converter import (
    convert_chat_template,
    convert_text_template,
)
from studybuddy.observability.prompt_registry.models import ModelConfig

logger = logging.getLogger(__name__)


class PromptRegistry:
    """
    Singleton registry for Langfuse prompt management.

    Inactive (every call is a no-op returning None) unless tracing is
    enabled and both Langfuse keys are configured.

    Example:
        >>> registry = PromptRegistry()
        >>> registry.register_prompt(
        ...     name="study-assistant-chat",
        ...     template=CHAT_PROMPT,
        ...     config=ModelConfig(model="gpt-35-turbo", temperature=0.7),
        ...     labels=["production"],
        ... )
    """

    _instance: "PromptRegistry | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "PromptRegistry":
        """Singleton pattern for registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next instantiation re-reads settings."""
        cls._instance = None

    def _initialize(self) -> None:
        """Initialize Langfuse client with configuration."""
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse disabled, prompt registry inactive")
            self._enabled = False
            return

        if not obs_settings.public_key or not obs_settings.secret_key:
            logger.warning("Langfuse keys not configured, prompt registry inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.public_key,
            secret_key=obs_settings.secret_key,
            host=obs_settings.host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", obs_settings.host)

    @property
    def is_enabled(self) -> bool:
        """Check if registry is active."""
        return self._enabled

    def register_prompt(
        self,
        name: str,
        template: ChatPromptTemplate | PromptTemplate,
        config: ModelConfig,
        labels: list[str] | None = None,
    ) -> Any:
        """
        Register or version a prompt in Langfuse.

        Args:
            name: Unique prompt identifier
            template: LangChain ChatPromptTemplate or PromptTemplate
            config: Model configuration to store with prompt
            labels: Optional labels (e.g., ["production", "staging"])

        Returns:
            Created Langfuse prompt, or None if disabled

        Raises:
            ValueError: If template type is unsupported
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, skipping registration: name=%s", name)
            return None

        labels = labels or []

        if isinstance(template, ChatPromptTemplate):
            prompt_type, body = "chat", convert_chat_template(template)
        elif isinstance(template, PromptTemplate):
            prompt_type, body = "text", convert_text_template(template)
        else:
            raise ValueError(f"Unsupported template type: {type(template)}")

        prompt = self._client.create_prompt(
            name=name,
            type=prompt_type,
            prompt=body,
            config=config.to_langfuse_config(),
            labels=labels,
        )
        logger.info(
            "Registered %s prompt: name=%s version=%s labels=%s",
            prompt_type, name, prompt.version, labels,
        )
        return prompt

    def get_langchain_prompt(
        self,
        name: str,
        label: str | None = None,
        version: int | None = None,
    ) -> ChatPromptTemplate | None:
        """
        Fetch a chat prompt from Langfuse as a LangChain template.

        Args:
            name: Prompt identifier
            label: Optional label filter
            version: Optional specific version number

        Returns:
            ChatPromptTemplate with the Langfuse prompt attached as metadata,
            or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, cannot fetch: name=%s", name)
            return None

        kwargs: dict[str, Any] = {"name": name, "type": "chat"}
        if label:
            kwargs["label"] = label
        if version is not None:
            kwargs["version"] = version

        prompt = self._client.get_prompt(**kwargs)
        logger.debug("Fetched prompt: name=%s version=%s", name, prompt.version)

        template = ChatPromptTemplate.from_messages(prompt.get_langchain_prompt())
        template.metadata = {"langfuse_prompt": prompt}
        return template
