from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.domain.value_objects.scheduling import (
    AvailabilityRule,
    FixedBooking,
    FlexibleTask,
    ScheduleSuggestion,
    SchedulingPreferences,
    SuggestionDraft,
)
from autoscheduler.infrastructure.mappers.scheduling_domain_mapper import SchedulingDomainMapper
from autoscheduler.repositories import (
    availability_repo,
    flexible_tasks_repo,
    preferences_repo,
    suggestions_repo,
    time_blocks_repo,
)
from autoscheduler.services.scheduler.ischeduling_storage import ISchedulingStorage


class SQLSchedulingStorage(ISchedulingStorage):
    """Scheduling storage backed by the SQLAlchemy session of the current request.

    Each suggestion is committed as soon as it is written, so a failure on a
    later task never discards suggestions that were already produced.
    """

    def __init__(self, session: AsyncSession, mapper: SchedulingDomainMapper | None = None):
        self._session = session
        self._mapper = mapper or SchedulingDomainMapper()

    async def get_availability_rules(self, user_id: uuid.UUID) -> list[AvailabilityRule]:
        rows = await availability_repo.list_for_user(self._session, user_id=user_id)
        return [self._mapper.availability_rule(row) for row in rows]

    async def get_fixed_bookings_for_date(self, user_id: uuid.UUID, day: date) -> list[FixedBooking]:
        rows = await time_blocks_repo.list_for_date(self._session, user_id=user_id, day=day)
        return [self._mapper.fixed_booking(row) for row in rows]

    async def get_flexible_tasks(self, user_id: uuid.UUID, active_only: bool = True) -> list[FlexibleTask]:
        rows = await flexible_tasks_repo.list_for_user(self._session, user_id=user_id, active_only=active_only)
        return [self._mapper.flexible_task(row) for row in rows]

    async def get_scheduling_preferences(self, user_id: uuid.UUID) -> SchedulingPreferences | None:
        row = await preferences_repo.get_for_user(self._session, user_id=user_id)
        return self._mapper.preferences(row) if row is not None else None

    async def create_suggestion(self, user_id: uuid.UUID, draft: SuggestionDraft) -> ScheduleSuggestion:
        row = self._mapper.suggestion_row(user_id, draft)
        try:
            await suggestions_repo.create(self._session, row)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        return self._mapper.suggestion(row)

    async def list_suggestions(
        self,
        user_id: uuid.UUID,
        *,
        status: str | None = None,
        start_from: date | None = None,
        start_to: date | None = None,
    ) -> list[ScheduleSuggestion]:
        rows = await suggestions_repo.list(
            self._session,
            user_id=user_id,
            status=status,
            start_from=start_from,
            start_to=start_to,
        )
        return [self._mapper.suggestion(row) for row in rows]
