"""
Quiz API endpoints.

Routes:
- GET /quizzes - List quizzes
- GET /quizzes/stats - Score statistics over completed quizzes
- GET /quizzes/{id} - Get quiz
- POST /quizzes - Create quiz
- POST /quizzes/{id}/submit - Submit answers
- PUT /quizzes/{id} - Update quiz
- DELETE /quizzes/{id} - Delete quiz

Dependencies: studybuddy.application.services, studybuddy.models
System role: Quiz HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from studybuddy.api.deps.auth import get_current_owner_id
from studybuddy.api.deps.dependencies import get_quiz_service
from studybuddy.api.routers.router_utils import handle_service_errors
from studybuddy.application.services.quiz_service import QuizService
from studybuddy.models.quiz import (
    CreateQuizRequest,
    QuizResponse,
    QuizStatsResponse,
    SubmitQuizRequest,
    UpdateQuizRequest,
)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("", response_model=list[QuizResponse])
@handle_service_errors
async def list_quizzes(
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> list[QuizResponse]:
    """List the caller's quizzes, newest first."""
    quizzes = await quiz_service.list_quizzes(owner_id)
    return [QuizResponse(**q) for q in quizzes]


@router.get("/stats", response_model=QuizStatsResponse)
@handle_service_errors
async def get_quiz_stats(
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizStatsResponse:
    """Average, highest and lowest score over completed quizzes."""
    return QuizStatsResponse(**await quiz_service.get_stats(owner_id))


@router.get("/{quiz_id}", response_model=QuizResponse)
@handle_service_errors
async def get_quiz(
    quiz_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizResponse:
    """Get a quiz."""
    return QuizResponse(**await quiz_service.get_quiz(quiz_id, owner_id))


@router.post("", response_model=QuizResponse, status_code=201)
@handle_service_errors
async def create_quiz(
    request: CreateQuizRequest,
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizResponse:
    """Create a quiz."""
    quiz = await quiz_service.create_quiz(owner_id, request.to_store_fields())
    return QuizResponse(**quiz)


@router.post("/{quiz_id}/submit", response_model=QuizResponse)
@handle_service_errors
async def submit_quiz(
    quiz_id: UUID,
    request: SubmitQuizRequest,
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizResponse:
    """
    Submit answers, one option index per question.

    Returns:
        QuizResponse: Quiz marked completed with its percentage score
    """
    quiz = await quiz_service.submit_quiz(quiz_id, owner_id, request.answers)
    return QuizResponse(**quiz)


@router.put("/{quiz_id}", response_model=QuizResponse)
@handle_service_errors
async def update_quiz(
    quiz_id: UUID,
    request: UpdateQuizRequest,
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizResponse:
    """Update a quiz."""
    quiz = await quiz_service.update_quiz(quiz_id, owner_id, request.to_store_fields())
    return QuizResponse(**quiz)


@router.delete("/{quiz_id}", status_code=204)
@handle_service_errors
async def delete_quiz(
    quiz_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> None:
    """Delete a quiz."""
    await quiz_service.delete_quiz(quiz_id, owner_id)
