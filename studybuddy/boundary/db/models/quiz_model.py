"""
Quiz ORM model.

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Quiz persistence
"""

from sqlalchemy import JSON, Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.boundary.db.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class QuizModel(Base, UUIDMixin, TimestampMixin, OwnedMixin):
    """
    Multiple-choice quiz.

    Attributes:
        title: Quiz title
        description: Optional description (empty string when absent)
        questions: JSON list of {question, options: [{text, isCorrect}], explanation}
        completed: Set once answers were submitted
        score: Percentage of correct answers from the last submission
    """

    __tablename__ = "quizzes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    questions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
