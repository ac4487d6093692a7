"""
Exception hierarchy for the StudyBuddy application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StudyBuddyException(Exception):
    """Base exception for all StudyBuddy application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StudyBuddyException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(StudyBuddyException):
    """Base class for owner-scoped lookups that resolved to nothing."""


class ChatNotFoundError(NotFoundError):
    """Raised when a chat cannot be found for the requesting owner."""

    def __init__(self, chat_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize chat not found error.

        Args:
            chat_id: ID of the missing chat
            details: Additional context
        """
        details = details or {}
        details["chat_id"] = chat_id
        super().__init__("Chat not found", details)


class DocumentNotFoundError(NotFoundError):
    """Raised when a quiz, study plan, note or nested topic cannot be found."""

    def __init__(
        self,
        document_type: str,
        document_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document not found error.

        Args:
            document_type: Human-readable document kind (e.g. "Quiz")
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"{document_type} not found", details)


class LLMGatewayError(StudyBuddyException):
    """Raised when no configured LLM provider produced a completion."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize gateway error.

        Args:
            message: Error message
            provider: Provider that failed last
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class ContextPersistenceError(StudyBuddyException):
    """Raised when a chat's context could not be stored, even after clearing active items."""

    def __init__(self, chat_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["chat_id"] = chat_id
        super().__init__("Failed to persist chat context", details)
