"""API-specific dependencies."""

# Re-export common dependencies
from .auth import create_access_token, get_current_owner_id
from .dependencies import (
    get_chat_service,
    get_intent_parser,
    get_note_service,
    get_quiz_service,
    get_service_cache,
    get_study_plan_service,
)

__all__ = [
    "create_access_token",
    "get_current_owner_id",
    "get_chat_service",
    "get_intent_parser",
    "get_note_service",
    "get_quiz_service",
    "get_service_cache",
    "get_study_plan_service",
]
