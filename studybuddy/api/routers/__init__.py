"""API routers."""

from .chats import router as chats_router
from .health import router as health_router
from .notes import router as notes_router
from .quizzes import router as quizzes_router
from .study_plans import router as study_plans_router

__all__ = [
    "chats_router",
    "health_router",
    "notes_router",
    "quizzes_router",
    "study_plans_router",
]
