from __future__ import annotations

import uuid
from datetime import date
from typing import Protocol

from autoscheduler.domain.value_objects.scheduling import (
    AvailabilityRule,
    FixedBooking,
    FlexibleTask,
    ScheduleSuggestion,
    SchedulingPreferences,
    SuggestionDraft,
)


class ISchedulingStorage(Protocol):
    async def get_availability_rules(self, user_id: uuid.UUID) -> list[AvailabilityRule]:
        ...

    async def get_fixed_bookings_for_date(self, user_id: uuid.UUID, day: date) -> list[FixedBooking]:
        ...

    async def get_flexible_tasks(self, user_id: uuid.UUID, active_only: bool = True) -> list[FlexibleTask]:
        ...

    async def get_scheduling_preferences(self, user_id: uuid.UUID) -> SchedulingPreferences | None:
        ...

    async def create_suggestion(self, user_id: uuid.UUID, draft: SuggestionDraft) -> ScheduleSuggestion:
        ...
