"""
Chat pipeline configuration settings.

Dependencies: pydantic_settings
System role: Tunables for the chat turn orchestrator
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studybuddy.configs.base import BaseSettings


class ChatSettings(BaseSettings):
    """Chat turn processing configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    history_window: int = Field(
        default=5,
        gt=0,
        description="Number of most recent messages sent to the LLM",
    )
    max_active_items: int = Field(
        default=5,
        gt=0,
        description="Active items remembered per document type",
    )
    default_title: str = Field(
        default="New Conversation",
        description="Title given to new chats",
    )
    use_prompt_registry: bool = Field(
        default=False,
        description="Fetch the system prompt from the Langfuse registry",
    )
    prompt_label: str | None = Field(
        default=None,
        description="Registry label filter (e.g. production)",
    )
