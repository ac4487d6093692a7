"""
LLM completion gateway.

Builds LangChain chat models for the configured primary and fallback
providers and exposes a single async ``complete`` call returning text.

Dependencies: langchain_core, langchain_openai, langchain_google_genai, studybuddy.configs
System role: The only path from the chat pipeline to an external LLM
"""

import logging
from typing import Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from studybuddy.configs.llm import LLMSettings, ProviderName
from studybuddy.core.exceptions import LLMGatewayError

logger = logging.getLogger(__name__)


def build_chat_model(provider: ProviderName, settings: LLMSettings) -> BaseChatModel | None:
    """
    Create the LangChain chat model for one provider.

    Args:
        provider: Provider name
        settings: LLM configuration

    Returns:
        Configured chat model, or None when the provider's credentials are missing
    """
    if provider == "azure_openai":
        if not settings.azure_api_key or not settings.azure_endpoint:
            return None

        return AzureChatOpenAI(
            api_key=settings.azure_api_key,
            azure_endpoint=settings.azure_endpoint,
            azure_deployment=settings.azure_deployment,
            api_version=settings.azure_api_version,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.request_timeout,
            max_retries=0,
        )

    if provider == "openai":
        if not settings.openai_api_key:
            return None

        return ChatOpenAI(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.request_timeout,
            max_retries=0,
        )

    if provider == "google_genai":
        if not settings.google_api_key:
            return None

        return ChatGoogleGenerativeAI(
            google_api_key=settings.google_api_key,
            model=settings.google_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_tokens,
            timeout=settings.request_timeout,
            max_retries=0,
        )

    raise ValueError(f"Unknown LLM provider: {provider}")


class LLMGateway:
    """
    Chat completion gateway with transparent provider fallback.

    The primary model is wrapped with ``with_fallbacks`` when a fallback
    provider is configured and usable; callers never see which provider
    answered. Providers without credentials are skipped at construction.
    """

    def __init__(
        self,
        settings: LLMSettings,
        model: BaseChatModel | Runnable | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            settings: LLM configuration
            model: Pre-built chat model or runnable (bypasses provider construction)
        """
        self._settings = settings
        self._provider = settings.primary_provider
        self._chain = self._build_chain(model)

    def _build_chain(self, model: BaseChatModel | Runnable | None) -> Runnable | None:
        if model is not None:
            return model | StrOutputParser()

        providers: list[ProviderName] = [self._settings.primary_provider]
        if (
            self._settings.fallback_provider
            and self._settings.fallback_provider != self._settings.primary_provider
        ):
            providers.append(self._settings.fallback_provider)

        models: list[BaseChatModel] = []
        for provider in providers:
            chat_model = build_chat_model(provider, self._settings)
            if chat_model is None:
                logger.warning(
                    "LLM provider skipped, credentials missing",
                    extra={"provider": provider},
                )
                continue
            models.append(chat_model)

        if not models:
            logger.error("No usable LLM provider configured", extra={"providers": providers})
            return None

        primary, *fallbacks = models
        runnable: Runnable = primary.with_fallbacks(fallbacks) if fallbacks else primary
        logger.info(
            "LLM gateway initialized",
            extra={"providers": providers, "usable": len(models)},
        )
        return runnable | StrOutputParser()

    @property
    def is_configured(self) -> bool:
        """True when at least one provider can be called."""
        return self._chain is not None

    async def complete(self, messages: Sequence[BaseMessage]) -> str:
        """
        Run one chat completion.

        Args:
            messages: Ordered role-tagged messages (system, history, user)

        Returns:
            Assistant text

        Raises:
            LLMGatewayError: No provider configured, every provider failed,
                or the completion was empty
        """
        if self._chain is None:
            raise LLMGatewayError("No LLM provider is configured", provider=self._provider)

        try:
            text = await self._chain.ainvoke(list(messages))
        except Exception as e:
            logger.warning(
                "LLM completion failed",
                extra={"provider": self._provider, "error_type": type(e).__name__},
            )
            raise LLMGatewayError(f"LLM completion failed: {e}", provider=self._provider) from e

        if not text or not text.strip():
            raise LLMGatewayError("LLM returned an empty completion", provider=self._provider)

        return text
