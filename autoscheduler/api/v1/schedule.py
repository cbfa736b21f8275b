from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from autoscheduler.api.deps import get_current_user_id
from autoscheduler.core.config import settings
from autoscheduler.core.logging import log
from autoscheduler.core.response import err, ok
from autoscheduler.infrastructure.di_scheduler import (
    get_availability_resolver,
    get_schedule_orchestrator,
    get_scheduling_storage,
)
from autoscheduler.infrastructure.mappers.scheduling_api_mapper import SchedulingApiMapper
from autoscheduler.infrastructure.repositories.scheduling_storage import SQLSchedulingStorage
from autoscheduler.schemas.scheduling import ScheduleGenerateIn
from autoscheduler.services.observability import record_schedule_run_failed
from autoscheduler.services.scheduler.availability import AvailabilityResolver
from autoscheduler.services.scheduler.orchestrator import TaskSchedulingOrchestrator

router = APIRouter()

SUGGESTION_STATUSES = {"pending", "accepted", "rejected", "completed"}

_mapper = SchedulingApiMapper()


def _ensure_date_range(request: Request, start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(
            status_code=400,
            detail=err(request, "invalid_date_range", "end_date must not be before start_date"),
        )
    days = (end_date - start_date).days + 1
    if days > settings.SCHEDULER_MAX_RANGE_DAYS:
        raise HTTPException(
            status_code=400,
            detail=err(
                request,
                "invalid_date_range",
                f"Date range must not exceed {settings.SCHEDULER_MAX_RANGE_DAYS} days",
                {"days": days},
            ),
        )


@router.post("/schedule-suggestions/generate")
async def generate_schedule_suggestions(
    request: Request,
    body: ScheduleGenerateIn,
    user_id: uuid.UUID = Depends(get_current_user_id),
    orchestrator: TaskSchedulingOrchestrator = Depends(get_schedule_orchestrator),
):
    _ensure_date_range(request, body.start_date, body.end_date)

    try:
        result = await orchestrator.generate_schedule_suggestions(
            user_id,
            body.start_date,
            body.end_date,
            task_ids=body.task_ids,
        )
    except Exception as exc:
        record_schedule_run_failed(user_id=str(user_id), error=str(exc), request_id=request.state.request_id)
        raise

    log.info(
        "schedule_suggestions_generated",
        request_id=request.state.request_id,
        user_id=str(user_id),
        start_date=body.start_date.isoformat(),
        end_date=body.end_date.isoformat(),
        suggestions=result.summary.total_suggestions,
    )
    return ok(request, _mapper.generation_result(result))


@router.get("/schedule-suggestions")
async def list_schedule_suggestions(
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    storage: SQLSchedulingStorage = Depends(get_scheduling_storage),
    status: str | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
):
    if status and status not in SUGGESTION_STATUSES:
        raise HTTPException(status_code=400, detail=err(request, "validation_error", "Unsupported status filter"))

    items = await storage.list_suggestions(user_id, status=status, start_from=start_date, start_to=end_date)

    log.info(
        "schedule_suggestions_list",
        request_id=request.state.request_id,
        user_id=str(user_id),
        count=len(items),
    )
    return ok(request, {"items": [_mapper.suggestion(item) for item in items]})


@router.get("/schedule/available-slots")
async def get_available_slots(
    request: Request,
    start_date: date = Query(),
    end_date: date = Query(),
    user_id: uuid.UUID = Depends(get_current_user_id),
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
):
    _ensure_date_range(request, start_date, end_date)

    slots = await resolver.resolve_available_slots(user_id, start_date, end_date)

    log.info(
        "available_slots_resolved",
        request_id=request.state.request_id,
        user_id=str(user_id),
        count=len(slots),
    )
    return ok(request, {"items": [_mapper.slot(slot) for slot in slots]})
