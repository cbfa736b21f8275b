from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.models.schedule_suggestion import ScheduleSuggestion


async def list(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    status: str | None = None,
    start_from: date | None = None,
    start_to: date | None = None,
    flexible_task_id: uuid.UUID | None = None,
    limit: int = 100,
) -> list[ScheduleSuggestion]:
    q = select(ScheduleSuggestion).where(ScheduleSuggestion.user_id == user_id)
    if status:
        q = q.where(ScheduleSuggestion.status == status)
    if start_from:
        q = q.where(ScheduleSuggestion.suggested_date >= start_from)
    if start_to:
        q = q.where(ScheduleSuggestion.suggested_date <= start_to)
    if flexible_task_id:
        q = q.where(ScheduleSuggestion.flexible_task_id == flexible_task_id)

    q = q.order_by(
        ScheduleSuggestion.suggested_date,
        ScheduleSuggestion.start_time,
        ScheduleSuggestion.confidence_score.desc(),
    ).limit(max(1, min(limit, 500)))
    res = await db.execute(q)
    return [*res.scalars().all()]


async def create(db: AsyncSession, suggestion: ScheduleSuggestion) -> ScheduleSuggestion:
    db.add(suggestion)
    await db.flush()
    return suggestion
