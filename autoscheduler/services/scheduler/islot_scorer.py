from __future__ import annotations

from datetime import date
from typing import Protocol

from autoscheduler.domain.value_objects.scheduling import (
    AvailableSlot,
    FlexibleTask,
    ScoredSlot,
    SchedulingPreferences,
)


class ISlotScorer(Protocol):
    def score_slot(
        self,
        slot: AvailableSlot,
        task: FlexibleTask,
        preferences: SchedulingPreferences | None = None,
        *,
        used_days: set[date] | frozenset[date] = frozenset(),
    ) -> ScoredSlot:
        ...
