"""
Observability module.

Provides logging configuration, correlation ID tracking, request
middleware, and prompt version management.
"""

from studybuddy.observability.correlation import get_correlation_id, set_correlation_id
from studybuddy.observability.logger import configure_logging
from studybuddy.observability.prompt_registry import ModelConfig, PromptRegistry

__all__ = [
    "PromptRegistry",
    "ModelConfig",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
