"""
Study plan domain models and schemas.

Dependencies: pydantic
System role: Study plan API contracts and chat-generated plan payload fields
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from studybuddy.models.common import CamelModel, ensure_utc


class StudyPlanTopic(CamelModel):
    """Topic within a study plan."""

    id: str | None = None
    title: str
    description: str | None = None
    completed: bool = False
    deadline: datetime | None = None


class StudyPlanFields(CamelModel):
    """Editable study plan fields shared by requests, responses and chat payloads."""

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    topics: list[StudyPlanTopic] = Field(default_factory=list)
    start_date: datetime
    end_date: datetime

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def to_store_fields(self) -> dict[str, Any]:
        """Column values for StudyPlanModel."""
        return {
            "title": self.title,
            "description": self.description,
            "topics": [t.model_dump(mode="json", by_alias=True) for t in self.topics],
            "start_date": self.start_date,
            "end_date": self.end_date,
        }


class CreateStudyPlanRequest(StudyPlanFields):
    """Request schema for creating a study plan."""


class UpdateStudyPlanRequest(CamelModel):
    """Request schema for updating a study plan; omitted fields are left as-is."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    topics: list[StudyPlanTopic] | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    def to_store_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_none=True, exclude={"topics"})
        if self.topics is not None:
            fields["topics"] = [
                t.model_dump(mode="json", by_alias=True) for t in self.topics
            ]
        return fields


class UpdateTopicRequest(CamelModel):
    """Request schema for updating one topic of a study plan."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    completed: bool | None = None
    deadline: datetime | None = None


class StudyPlanResponse(StudyPlanFields):
    """Response schema for study plan operations."""

    id: str
    progress: int
    created_at: datetime
    updated_at: datetime
