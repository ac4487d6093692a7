"""
Observability configuration settings.

Settings for Langfuse prompt management and tracing.

Dependencies: pydantic_settings
System role: Observability configuration for tracing and logging
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ObservabilitySettings(BaseSettings):
    """Observability configuration for Langfuse."""

    model_config = SettingsConfigDict(
        env_prefix="LANGFUSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    public_key: str | None = Field(
        default=None,
        description="Langfuse public key",
    )
    secret_key: str | None = Field(
        default=None,
        description="Langfuse secret key",
    )
    host: str = Field(
        default="http://localhost:3000",
        description="Langfuse server host URL",
    )
    enable_tracing: bool = Field(
        default=False,
        description="Enable Langfuse integration",
    )
