"""
Core business logic module.

Contains the exception hierarchy and the chat turn pipeline.
"""

from studybuddy.core.exceptions import (
    ChatNotFoundError,
    ContextPersistenceError,
    DocumentNotFoundError,
    LLMGatewayError,
    NotFoundError,
    StudyBuddyException,
    ValidationError,
)

__all__ = [
    "StudyBuddyException",
    "ValidationError",
    "NotFoundError",
    "ChatNotFoundError",
    "DocumentNotFoundError",
    "LLMGatewayError",
    "ContextPersistenceError",
]
