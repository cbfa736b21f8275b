from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.models.availability import UserAvailability


async def list_for_user(db: AsyncSession, *, user_id: uuid.UUID) -> list[UserAvailability]:
    res = await db.execute(
        select(UserAvailability)
        .where(UserAvailability.user_id == user_id)
        .order_by(UserAvailability.day_of_week, UserAvailability.start_time)
    )
    return list(res.scalars().all())


async def create(db: AsyncSession, rule: UserAvailability) -> UserAvailability:
    db.add(rule)
    await db.flush()
    return rule
