"""
Quiz service orchestrator.

Coordinates quiz CRUD, answer submission and score statistics.

Dependencies: studybuddy.boundary.db.CRUD, studybuddy.core.exceptions
System role: Quiz use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.CRUD.quiz_crud import quiz_crud
from studybuddy.boundary.db.models.quiz_model import QuizModel
from studybuddy.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


def quiz_to_dict(quiz: QuizModel) -> dict[str, Any]:
    return {
        "id": str(quiz.id),
        "title": quiz.title,
        "description": quiz.description,
        "questions": quiz.questions,
        "completed": quiz.completed,
        "score": quiz.score,
        "created_at": quiz.created_at,
        "updated_at": quiz.updated_at,
    }


def score_answers(questions: list[dict], answers: list[int]) -> float:
    """
    Percentage of questions answered with a correct option.

    Answers are option indexes in question order; missing, extra and
    out-of-range answers count as wrong.
    """
    if not questions:
        return 0.0

    correct = 0
    for question, selected in zip(questions, answers):
        options = question.get("options") or []
        if 0 <= selected < len(options) and options[selected].get("isCorrect"):
            correct += 1
    return correct / len(questions) * 100


class QuizService:
    """Quiz service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize quiz service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_owned(self, quiz_id: UUID, owner_id: str) -> QuizModel:
        quiz = await quiz_crud.get_for_owner(self.db, quiz_id, owner_id)
        if quiz is None:
            raise DocumentNotFoundError("Quiz", str(quiz_id))
        return quiz

    async def list_quizzes(self, owner_id: str) -> list[dict]:
        """List the owner's quizzes, newest first."""
        quizzes = await quiz_crud.list_for_owner(self.db, owner_id)
        return [quiz_to_dict(q) for q in quizzes]

    async def get_quiz(self, quiz_id: UUID, owner_id: str) -> dict:
        """
        Get quiz by ID.

        Raises:
            DocumentNotFoundError: If quiz not found for this owner
        """
        return quiz_to_dict(await self._get_owned(quiz_id, owner_id))

    async def create_quiz(self, owner_id: str, fields: dict[str, Any]) -> dict:
        """
        Create a quiz.

        Args:
            owner_id: Owning user
            fields: Column values (title, description, questions)

        Returns:
            dict: Created quiz
        """
        quiz = await quiz_crud.create_for_owner(self.db, owner_id, **fields)
        await self.db.commit()
        logger.info("Quiz created", extra={"quiz_id": str(quiz.id), "owner_id": owner_id})
        return quiz_to_dict(quiz)

    async def update_quiz(self, quiz_id: UUID, owner_id: str, fields: dict[str, Any]) -> dict:
        """
        Update quiz fields; omitted fields are left as-is.

        Raises:
            DocumentNotFoundError: If quiz not found for this owner
        """
        quiz = await self._get_owned(quiz_id, owner_id)
        if fields:
            quiz = await quiz_crud.apply_updates(self.db, quiz, **fields)
            await self.db.commit()
            logger.info(
                "Quiz updated",
                extra={"quiz_id": str(quiz_id), "updates": list(fields.keys())},
            )
        return quiz_to_dict(quiz)

    async def delete_quiz(self, quiz_id: UUID, owner_id: str) -> None:
        """
        Delete quiz.

        Raises:
            DocumentNotFoundError: If quiz not found for this owner
        """
        deleted = await quiz_crud.delete_for_owner(self.db, quiz_id, owner_id)
        if not deleted:
            raise DocumentNotFoundError("Quiz", str(quiz_id))
        await self.db.commit()
        logger.info("Quiz deleted", extra={"quiz_id": str(quiz_id)})

    async def submit_quiz(self, quiz_id: UUID, owner_id: str, answers: list[int]) -> dict:
        """
        Score submitted answers and mark the quiz completed.

        Args:
            quiz_id: Quiz UUID
            owner_id: Owning user
            answers: Selected option index per question

        Returns:
            dict: Quiz with updated score and completed flag

        Raises:
            DocumentNotFoundError: If quiz not found for this owner
        """
        quiz = await self._get_owned(quiz_id, owner_id)
        score = score_answers(quiz.questions or [], answers)
        quiz = await quiz_crud.apply_updates(self.db, quiz, score=score, completed=True)
        await self.db.commit()
        logger.info("Quiz submitted", extra={"quiz_id": str(quiz_id), "score": score})
        return quiz_to_dict(quiz)

    async def get_stats(self, owner_id: str) -> dict:
        """
        Aggregate scores over the owner's completed quizzes.

        Returns:
            dict: total_quizzes, average_score, completed_quizzes,
            highest_score, lowest_score (all 0 when nothing is completed)
        """
        scores = [q.score for q in await quiz_crud.list_completed(self.db, owner_id)]
        return {
            "total_quizzes": len(scores),
            "average_score": sum(scores) / len(scores) if scores else 0.0,
            "completed_quizzes": len(scores),
            "highest_score": max(scores, default=0.0),
            "lowest_score": min(scores, default=0.0),
        }
