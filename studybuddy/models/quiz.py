"""
Quiz domain models and schemas.

Dependencies: pydantic
System role: Quiz API contracts and chat-generated quiz payload fields
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from studybuddy.models.common import CamelModel


class QuizOption(CamelModel):
    """Answer option."""

    text: str
    is_correct: bool = False


class QuizQuestion(CamelModel):
    """Multiple-choice question."""

    question: str
    options: list[QuizOption] = Field(default_factory=list)
    explanation: str | None = None


class QuizFields(CamelModel):
    """Editable quiz fields shared by requests, responses and chat payloads."""

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    questions: list[QuizQuestion] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_store_fields(self) -> dict[str, Any]:
        """Column values for QuizModel; nested JSON keeps the camelCase wire shape."""
        return {
            "title": self.title,
            "description": self.description,
            "questions": [q.model_dump(mode="json", by_alias=True) for q in self.questions],
        }


class CreateQuizRequest(QuizFields):
    """Request schema for creating a quiz."""


class UpdateQuizRequest(CamelModel):
    """Request schema for updating a quiz; omitted fields are left as-is."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    questions: list[QuizQuestion] | None = None

    def to_store_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if self.title is not None:
            fields["title"] = self.title
        if self.description is not None:
            fields["description"] = self.description
        if self.questions is not None:
            fields["questions"] = [
                q.model_dump(mode="json", by_alias=True) for q in self.questions
            ]
        return fields


class SubmitQuizRequest(CamelModel):
    """Selected option index per question, in question order."""

    answers: list[int] = Field(default_factory=list)


class QuizResponse(QuizFields):
    """Response schema for quiz operations."""

    id: str
    completed: bool
    score: float
    created_at: datetime
    updated_at: datetime


class QuizStatsResponse(CamelModel):
    """Aggregate results over a user's completed quizzes."""

    total_quizzes: int
    average_score: float
    completed_quizzes: int
    highest_score: float
    lowest_score: float
