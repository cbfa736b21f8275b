from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.domain.value_objects.calendar import Weekday
from autoscheduler.models.time_block import TimeBlock


async def list_for_date(db: AsyncSession, *, user_id: uuid.UUID, day: date) -> list[TimeBlock]:
    """Blocks dated on ``day`` plus recurring blocks whose recurrence days include its weekday."""
    res = await db.execute(
        select(TimeBlock)
        .where(
            TimeBlock.user_id == user_id,
            or_(TimeBlock.block_date == day, TimeBlock.is_recurring == True),  # noqa: E712
        )
        .order_by(TimeBlock.start_time)
    )
    day_name = Weekday.from_date(day).label
    blocks: list[TimeBlock] = []
    for block in res.scalars().all():
        if block.block_date == day:
            blocks.append(block)
        elif block.is_recurring and day_name in [d.lower() for d in block.recurrence_days or []]:
            blocks.append(block)
    return blocks


async def create(db: AsyncSession, block: TimeBlock) -> TimeBlock:
    db.add(block)
    await db.flush()
    return block
