from __future__ import annotations

from datetime import datetime, timezone

from autoscheduler.core.logging import log


def record_schedule_run(
    *,
    user_id: str,
    total_tasks: int,
    scheduled_tasks: int,
    total_suggestions: int,
    conflicts: int,
    unschedulable: int,
    latency_ms: int | None = None,
) -> None:
    # request_id comes from the structlog contextvars bound by RequestContextMiddleware
    log.info(
        "schedule_run",
        user_id=user_id,
        total_tasks=total_tasks,
        scheduled_tasks=scheduled_tasks,
        total_suggestions=total_suggestions,
        conflicts=conflicts,
        unschedulable=unschedulable,
        latency_ms=latency_ms,
        logged_at=datetime.now(timezone.utc).isoformat(),
    )


def record_schedule_run_failed(*, user_id: str, error: str, request_id: str | None = None) -> None:
    log.error(
        "schedule_run_failed",
        request_id=request_id,
        user_id=user_id,
        error=error,
        logged_at=datetime.now(timezone.utc).isoformat(),
    )
