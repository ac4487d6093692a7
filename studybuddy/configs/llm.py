"""
LLM gateway configuration settings.

Provider selection and credentials for the chat completion gateway.
A primary provider is always tried first; the optional fallback provider
is used when the primary raises.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration passed to the gateway at construction
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studybuddy.configs.base import BaseSettings

ProviderName = Literal["azure_openai", "openai", "google_genai"]


class LLMSettings(BaseSettings):
    """Chat completion provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    primary_provider: ProviderName = Field(
        default="azure_openai",
        description="Provider tried first for every completion",
    )
    fallback_provider: ProviderName | None = Field(
        default="openai",
        description="Provider used when the primary fails (None disables fallback)",
    )

    azure_api_key: str | None = Field(default=None, description="Azure OpenAI API key")
    azure_endpoint: str | None = Field(default=None, description="Azure OpenAI endpoint URL")
    azure_deployment: str = Field(default="gpt-35-turbo", description="Azure deployment name")
    azure_api_version: str = Field(default="2023-05-15", description="Azure OpenAI API version")

    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-3.5-turbo", description="OpenAI model name")

    google_api_key: str | None = Field(default=None, description="Google GenAI API key")
    google_model: str = Field(default="gemini-2.0-flash", description="Google GenAI model name")

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=800, gt=0, description="Maximum tokens per completion")
    request_timeout: float | None = Field(
        default=60.0,
        description="Per-request provider timeout in seconds (None waits indefinitely)",
    )
