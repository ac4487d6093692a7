"""
Shared settings for StudyBuddy configuration classes.

Every settings group reads the same `.env` file and carries the runtime
environment, debug flag and root log level used by `configure_logging`.

Dependencies: pydantic_settings
System role: Common parent of the StudyBuddy settings groups
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BaseSettings(PydanticBaseSettings):
    """Environment, debug and log level shared by all settings groups."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment reported in startup logs",
    )
    debug: bool = Field(
        default=False,
        description="FastAPI debug mode and uvicorn auto-reload",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Root logger level passed to configure_logging",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        # Accept "info" from the environment
        if isinstance(value, str):
            return value.strip().upper()
        return value
