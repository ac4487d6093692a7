"""
Langfuse prompt registry module.

Versions LangChain prompt templates in Langfuse together with the model
configuration they were written for.

Dependencies: langfuse, langchain_core, pydantic
System role: Prompt version management and LangChain integration
"""

from studybuddy.observability.prompt_registry.models import ModelConfig
from studybuddy.observability.prompt_registry.registry import PromptRegistry

__all__ = ["PromptRegistry", "ModelConfig"]
