from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.models.scheduling_preferences import SchedulingPreferences


async def get_for_user(db: AsyncSession, *, user_id: uuid.UUID) -> SchedulingPreferences | None:
    res = await db.execute(select(SchedulingPreferences).where(SchedulingPreferences.user_id == user_id))
    return res.scalar_one_or_none()


async def create(db: AsyncSession, prefs: SchedulingPreferences) -> SchedulingPreferences:
    db.add(prefs)
    await db.flush()
    return prefs
