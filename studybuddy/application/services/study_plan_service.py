"""
Study plan service orchestrator.

Coordinates study plan CRUD, per-topic updates and date range queries.
Progress is recomputed by the CRUD layer on every write.

Dependencies: studybuddy.boundary.db.CRUD, studybuddy.core.exceptions
System role: Study plan use case orchestration
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.CRUD.study_plan_crud import study_plan_crud
from studybuddy.boundary.db.models.study_plan_model import StudyPlanModel
from studybuddy.core.exceptions import DocumentNotFoundError, ValidationError
from studybuddy.models.common import ensure_utc

logger = logging.getLogger(__name__)


def study_plan_to_dict(plan: StudyPlanModel) -> dict[str, Any]:
    return {
        "id": str(plan.id),
        "title": plan.title,
        "description": plan.description,
        "topics": plan.topics or [],
        "start_date": plan.start_date,
        "end_date": plan.end_date,
        "progress": plan.progress,
        "created_at": plan.created_at,
        "updated_at": plan.updated_at,
    }


class StudyPlanService:
    """Study plan service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize study plan service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_owned(self, plan_id: UUID, owner_id: str) -> StudyPlanModel:
        plan = await study_plan_crud.get_for_owner(self.db, plan_id, owner_id)
        if plan is None:
            raise DocumentNotFoundError("Study plan", str(plan_id))
        return plan

    async def list_study_plans(self, owner_id: str) -> list[dict]:
        plans = await study_plan_crud.list_for_owner(self.db, owner_id)
        return [study_plan_to_dict(p) for p in plans]

    async def get_study_plan(self, plan_id: UUID, owner_id: str) -> dict:
        return study_plan_to_dict(await self._get_owned(plan_id, owner_id))

    async def create_study_plan(self, owner_id: str, fields: dict[str, Any]) -> dict:
        """
        Create a study plan.

        Args:
            owner_id: Owning user
            fields: Column values (title, description, topics, start_date, end_date)

        Returns:
            dict: Created plan with topic ids and progress filled in
        """
        plan = await study_plan_crud.create_for_owner(self.db, owner_id, **fields)
        await self.db.commit()
        logger.info(
            "Study plan created",
            extra={"study_plan_id": str(plan.id), "topics": len(plan.topics)},
        )
        return study_plan_to_dict(plan)

    async def update_study_plan(
        self,
        plan_id: UUID,
        owner_id: str,
        fields: dict[str, Any],
    ) -> dict:
        """
        Update plan fields; omitted fields are left as-is.

        Incoming topics carrying the id of an existing topic keep that
        topic's stored values for anything they leave unset.

        Raises:
            DocumentNotFoundError: If plan not found for this owner
        """
        plan = await self._get_owned(plan_id, owner_id)

        if "topics" in fields:
            existing = {t.get("id"): t for t in plan.topics or []}
            fields["topics"] = [
                {**existing.get(topic.get("id"), {}), **{k: v for k, v in topic.items() if v is not None}}
                for topic in fields["topics"]
            ]

        plan = await study_plan_crud.apply_updates(self.db, plan, **fields)
        await self.db.commit()
        logger.info(
            "Study plan updated",
            extra={"study_plan_id": str(plan_id), "updates": list(fields.keys())},
        )
        return study_plan_to_dict(plan)

    async def update_topic(
        self,
        plan_id: UUID,
        owner_id: str,
        topic_id: str,
        fields: dict[str, Any],
    ) -> dict:
        """
        Update one topic of a plan and recompute progress.

        Args:
            plan_id: Plan UUID
            owner_id: Owning user
            topic_id: Topic id within the plan
            fields: Topic fields to change (title, description, completed, deadline)

        Returns:
            dict: Updated plan

        Raises:
            DocumentNotFoundError: If the plan or the topic does not exist
        """
        plan = await self._get_owned(plan_id, owner_id)

        topics = [dict(t) for t in plan.topics or []]
        index = next((i for i, t in enumerate(topics) if t.get("id") == topic_id), None)
        if index is None:
            raise DocumentNotFoundError("Topic", topic_id, {"study_plan_id": str(plan_id)})

        topics[index].update(fields)
        plan = await study_plan_crud.apply_updates(self.db, plan, topics=topics)
        await self.db.commit()
        logger.info(
            "Study plan topic updated",
            extra={"study_plan_id": str(plan_id), "topic_id": topic_id, "progress": plan.progress},
        )
        return study_plan_to_dict(plan)

    async def delete_study_plan(self, plan_id: UUID, owner_id: str) -> None:
        deleted = await study_plan_crud.delete_for_owner(self.db, plan_id, owner_id)
        if not deleted:
            raise DocumentNotFoundError("Study plan", str(plan_id))
        await self.db.commit()
        logger.info("Study plan deleted", extra={"study_plan_id": str(plan_id)})

    async def get_by_date_range(
        self,
        owner_id: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[dict]:
        """
        Plans lying entirely within [start, end], earliest start first.

        Raises:
            ValidationError: If either bound is missing
        """
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")

        plans = await study_plan_crud.list_in_range(
            self.db, owner_id, ensure_utc(start), ensure_utc(end)
        )
        return [study_plan_to_dict(p) for p in plans]
