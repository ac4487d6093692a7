"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    chats_router,
    health_router,
    notes_router,
    quizzes_router,
    study_plans_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(chats_router)
api_router.include_router(quizzes_router)
api_router.include_router(study_plans_router)
api_router.include_router(notes_router)

__all__ = ["api_router"]
