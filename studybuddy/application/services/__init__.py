"""Service orchestrators."""

from .chat_service import ChatService
from .note_service import NoteService
from .quiz_service import QuizService
from .study_plan_service import StudyPlanService

__all__ = [
    "ChatService",
    "NoteService",
    "QuizService",
    "StudyPlanService",
]
