"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: studybuddy.configs, studybuddy.application, studybuddy.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.application.services import (
    ChatService,
    NoteService,
    QuizService,
    StudyPlanService,
)
from studybuddy.boundary.db import get_async_db
from studybuddy.configs import get_settings
from studybuddy.core.chat.intent_parser import IntentParser
from studybuddy.core.chat.llm_gateway import LLMGateway


class ServiceCache:
    """Container for cached, request-independent pipeline instances."""

    def __init__(self) -> None:
        self._gateway: LLMGateway | None = None
        self._parser: IntentParser | None = None

    @property
    def gateway(self) -> LLMGateway:
        """Get cached LLM gateway."""
        if self._gateway is None:
            self._gateway = LLMGateway(get_settings().llm)
        return self._gateway

    @property
    def parser(self) -> IntentParser:
        """Get cached intent parser."""
        if self._parser is None:
            self._parser = IntentParser(self.gateway)
        return self._parser

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gateway = None
        self._parser = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_intent_parser() -> IntentParser:
    """Get the shared intent parser."""
    return get_service_cache().parser


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    parser: IntentParser = Depends(get_intent_parser),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        parser: Shared intent parser (injected via Depends)

    Returns:
        ChatService: Chat service instance
    """
    return ChatService(db=db, parser=parser, settings=get_settings().chat)


def get_quiz_service(db: AsyncSession = Depends(get_async_db)) -> QuizService:
    """Get quiz service instance."""
    return QuizService(db=db)


def get_study_plan_service(db: AsyncSession = Depends(get_async_db)) -> StudyPlanService:
    """Get study plan service instance."""
    return StudyPlanService(db=db)


def get_note_service(db: AsyncSession = Depends(get_async_db)) -> NoteService:
    """Get note service instance."""
    return NoteService(db=db)
