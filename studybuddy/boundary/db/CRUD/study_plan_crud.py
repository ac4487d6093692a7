"""
Study plan CRUD operations.

Every write normalizes topics (stable ids, completed flag) and recomputes
the plan's progress percentage from them.

Dependencies: sqlalchemy, studybuddy.boundary.db.models
System role: Study plan persistence operations
"""

import uuid
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.models.study_plan_model import StudyPlanModel
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD


def normalize_topics(topics: list[dict] | None) -> list[dict]:
    """Give every topic an id and an explicit completed flag."""
    normalized = []
    for topic in topics or []:
        item = dict(topic)
        item["id"] = item.get("id") or str(uuid.uuid4())
        item["completed"] = bool(item.get("completed", False))
        normalized.append(item)
    return normalized


def compute_progress(topics: list[dict] | None) -> int:
    """Percentage of completed topics, rounded; 0 for a plan without topics."""
    if not topics:
        return 0
    completed = sum(1 for topic in topics if topic.get("completed"))
    return round(completed / len(topics) * 100)


class StudyPlanCRUD(OwnedCRUD[StudyPlanModel]):
    """CRUD operations for StudyPlanModel."""

    def __init__(self) -> None:
        """Initialize StudyPlanCRUD with StudyPlanModel."""
        super().__init__(StudyPlanModel)

    async def create(self, session: AsyncSession, **kwargs: Any) -> StudyPlanModel:
        topics = normalize_topics(kwargs.pop("topics", None))
        return await super().create(
            session,
            topics=topics,
            progress=compute_progress(topics),
            **kwargs,
        )

    async def apply_updates(
        self,
        session: AsyncSession,
        instance: StudyPlanModel,
        **kwargs: Any,
    ) -> StudyPlanModel:
        if "topics" in kwargs:
            kwargs["topics"] = normalize_topics(kwargs["topics"])
        kwargs["progress"] = compute_progress(kwargs.get("topics", instance.topics))
        return await super().apply_updates(session, instance, **kwargs)

    async def list_in_range(
        self,
        session: AsyncSession,
        owner_id: str,
        start: datetime,
        end: datetime,
    ) -> Sequence[StudyPlanModel]:
        """
        Plans that start on/after ``start`` and end on/before ``end``.

        Returns:
            Plans ordered by start date ascending
        """
        stmt = (
            select(StudyPlanModel)
            .where(
                StudyPlanModel.owner_id == owner_id,
                StudyPlanModel.start_date >= start,
                StudyPlanModel.end_date <= end,
            )
            .order_by(StudyPlanModel.start_date.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


study_plan_crud = StudyPlanCRUD()
