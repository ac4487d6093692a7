"""
Quiz CRUD operations.

Dependencies: sqlalchemy, studybuddy.boundary.db.models
System role: Quiz persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.models.quiz_model import QuizModel
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD


class QuizCRUD(OwnedCRUD[QuizModel]):
    """CRUD operations for QuizModel."""

    def __init__(self) -> None:
        """Initialize QuizCRUD with QuizModel."""
        super().__init__(QuizModel)

    async def list_completed(
        self,
        session: AsyncSession,
        owner_id: str,
    ) -> Sequence[QuizModel]:
        """Quizzes the owner has submitted answers for."""
        stmt = select(QuizModel).where(
            QuizModel.owner_id == owner_id,
            QuizModel.completed.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalars().all()


quiz_crud = QuizCRUD()
