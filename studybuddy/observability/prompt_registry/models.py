"""
Pydantic models for prompt registry configuration.

Dependencies: pydantic
System role: Configuration validation for prompt-model pairs
"""

from typing import Any

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """
    LLM configuration stored alongside a prompt version in Langfuse.

    Attributes:
        model: Model or deployment identifier (e.g., "gpt-35-turbo")
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Maximum tokens in response
        extra: Additional provider-specific parameters
    """

    model: str = Field(description="LLM model identifier")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    extra: dict[str, Any] | None = None

    def to_langfuse_config(self) -> dict[str, Any]:
        """Config dict for Langfuse prompt creation, omitting unset values."""
        config = self.model_dump(exclude_none=True, exclude={"extra"})
        if self.extra:
            config.update(self.extra)
        return config
