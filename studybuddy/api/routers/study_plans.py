"""
Study plan API endpoints.

Routes:
- GET /study-plans - List study plans
- GET /study-plans/date-range?startDate=&endDate= - Plans within a date range
- GET /study-plans/{id} - Get study plan
- POST /study-plans - Create study plan
- PUT /study-plans/{id} - Update study plan
- PUT /study-plans/{id}/topics/{topicId} - Update one topic
- DELETE /study-plans/{id} - Delete study plan

Dependencies: studybuddy.application.services, studybuddy.models
System role: Study plan HTTP API
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from studybuddy.api.deps.auth import get_current_owner_id
from studybuddy.api.deps.dependencies import get_study_plan_service
from studybuddy.api.routers.router_utils import handle_service_errors
from studybuddy.application.services.study_plan_service import StudyPlanService
from studybuddy.models.study_plan import (
    CreateStudyPlanRequest,
    StudyPlanResponse,
    UpdateStudyPlanRequest,
    UpdateTopicRequest,
)

router = APIRouter(prefix="/study-plans", tags=["study-plans"])


@router.get("", response_model=list[StudyPlanResponse])
@handle_service_errors
async def list_study_plans(
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> list[StudyPlanResponse]:
    """List the caller's study plans, newest first."""
    plans = await study_plan_service.list_study_plans(owner_id)
    return [StudyPlanResponse(**p) for p in plans]


@router.get("/date-range", response_model=list[StudyPlanResponse])
@handle_service_errors
async def get_study_plans_by_date_range(
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> list[StudyPlanResponse]:
    """
    Plans starting on/after startDate and ending on/before endDate.

    Raises:
        HTTPException(400): Either bound missing
    """
    plans = await study_plan_service.get_by_date_range(owner_id, start_date, end_date)
    return [StudyPlanResponse(**p) for p in plans]


@router.get("/{plan_id}", response_model=StudyPlanResponse)
@handle_service_errors
async def get_study_plan(
    plan_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> StudyPlanResponse:
    """Get a study plan."""
    return StudyPlanResponse(**await study_plan_service.get_study_plan(plan_id, owner_id))


@router.post("", response_model=StudyPlanResponse, status_code=201)
@handle_service_errors
async def create_study_plan(
    request: CreateStudyPlanRequest,
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> StudyPlanResponse:
    """Create a study plan; topic ids and progress are filled in."""
    plan = await study_plan_service.create_study_plan(owner_id, request.to_store_fields())
    return StudyPlanResponse(**plan)


@router.put("/{plan_id}", response_model=StudyPlanResponse)
@handle_service_errors
async def update_study_plan(
    plan_id: UUID,
    request: UpdateStudyPlanRequest,
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> StudyPlanResponse:
    """Update a study plan."""
    plan = await study_plan_service.update_study_plan(
        plan_id, owner_id, request.to_store_fields()
    )
    return StudyPlanResponse(**plan)


@router.put("/{plan_id}/topics/{topic_id}", response_model=StudyPlanResponse)
@handle_service_errors
async def update_topic(
    plan_id: UUID,
    topic_id: str,
    request: UpdateTopicRequest,
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> StudyPlanResponse:
    """
    Update one topic and recompute the plan's progress.

    Raises:
        HTTPException(404): Plan or topic not found
    """
    plan = await study_plan_service.update_topic(
        plan_id,
        owner_id,
        topic_id,
        request.model_dump(mode="json", exclude_none=True),
    )
    return StudyPlanResponse(**plan)


@router.delete("/{plan_id}", status_code=204)
@handle_service_errors
async def delete_study_plan(
    plan_id: UUID,
    owner_id: str = Depends(get_current_owner_id),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
) -> None:
    """Delete a study plan."""
    await study_plan_service.delete_study_plan(plan_id, owner_id)
