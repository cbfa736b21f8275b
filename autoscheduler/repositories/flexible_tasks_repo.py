from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.models.flexible_task import FlexibleTask


async def list_for_user(db: AsyncSession, *, user_id: uuid.UUID, active_only: bool = False) -> list[FlexibleTask]:
    q = select(FlexibleTask).where(FlexibleTask.user_id == user_id)
    if active_only:
        q = q.where(FlexibleTask.is_active == True)  # noqa: E712
    res = await db.execute(q.order_by(FlexibleTask.created_at, FlexibleTask.id))
    return list(res.scalars().all())


async def create(db: AsyncSession, task: FlexibleTask) -> FlexibleTask:
    db.add(task)
    await db.flush()
    return task
