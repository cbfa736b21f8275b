from __future__ import annotations

import uuid
from datetime import date, timedelta

from autoscheduler.core.config import settings
from autoscheduler.core.logging import log
from autoscheduler.domain.value_objects.calendar import Weekday
from autoscheduler.domain.value_objects.scheduling import AvailabilityRule, AvailableSlot, FixedBooking
from autoscheduler.services.scheduler.iavailability_resolver import IAvailabilityResolver
from autoscheduler.services.scheduler.ischeduling_storage import ISchedulingStorage
from autoscheduler.services.scheduler.time_utils import (
    intervals_overlap,
    time_of_day_bucket,
    to_minutes,
    to_time_string,
)


def free_intervals(
    window_start: int, window_end: int, bookings: list[tuple[int, int]]
) -> list[tuple[int, int]]:
    """Sweep a rule window left to right and return the gaps between bookings.

    Bookings that do not overlap the window are ignored. Overlapping bookings
    need no normalisation: the cursor only ever moves forward.
    """
    relevant = sorted(
        (b for b in bookings if intervals_overlap(window_start, window_end, b[0], b[1])),
        key=lambda b: b[0],
    )
    gaps: list[tuple[int, int]] = []
    cursor = window_start
    for booking_start, booking_end in relevant:
        if cursor < booking_start < window_end:
            gap_end = min(booking_start, window_end)
            if gap_end > cursor:
                gaps.append((cursor, gap_end))
        cursor = max(cursor, booking_end)
    if cursor < window_end:
        gaps.append((cursor, window_end))
    return gaps


class AvailabilityResolver(IAvailabilityResolver):
    def __init__(
        self,
        storage: ISchedulingStorage,
        *,
        min_slot_minutes: int = settings.SCHEDULER_MIN_SLOT_MINUTES,
        default_window_start: str = settings.SCHEDULER_DEFAULT_WINDOW_START,
        default_window_end: str = settings.SCHEDULER_DEFAULT_WINDOW_END,
        default_energy_level: str = settings.SCHEDULER_DEFAULT_ENERGY_LEVEL,
    ) -> None:
        self.storage = storage
        self.min_slot_minutes = min_slot_minutes
        self.default_window_start = default_window_start
        self.default_window_end = default_window_end
        self.default_energy_level = default_energy_level

    async def resolve_available_slots(self, user_id: uuid.UUID, start_date: date, end_date: date) -> list[AvailableSlot]:
        rules = await self.storage.get_availability_rules(user_id)
        slots: list[AvailableSlot] = []

        day = start_date
        while day <= end_date:
            bookings = await self.storage.get_fixed_bookings_for_date(user_id, day)
            slots.extend(self.slots_for_day(day, rules, bookings))
            day += timedelta(days=1)

        log.debug(
            "availability_resolved",
            user_id=str(user_id),
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            rules=len(rules),
            slots=len(slots),
        )
        return slots

    def slots_for_day(
        self, day: date, rules: list[AvailabilityRule], bookings: list[FixedBooking]
    ) -> list[AvailableSlot]:
        weekday = Weekday.from_date(day)
        day_rules = [rule for rule in rules if rule.day_of_week == weekday] or [self._default_rule(weekday)]
        occupied = [(booking.start_minutes, booking.end_minutes) for booking in bookings]

        slots: list[AvailableSlot] = []
        for rule in day_rules:
            for start, end in free_intervals(to_minutes(rule.start_time), to_minutes(rule.end_time), occupied):
                duration = end - start
                if duration < self.min_slot_minutes:
                    continue
                slots.append(
                    AvailableSlot(
                        date=day,
                        start_time=to_time_string(start),
                        end_time=to_time_string(end),
                        duration_minutes=duration,
                        energy_level=rule.energy_level or self.default_energy_level,
                        day_of_week=int(weekday),
                        time_of_day=time_of_day_bucket(start),
                    )
                )
        return slots

    def _default_rule(self, weekday: Weekday) -> AvailabilityRule:
        # synthesized per day, never persisted
        return AvailabilityRule(
            day_of_week=int(weekday),
            start_time=self.default_window_start,
            end_time=self.default_window_end,
            availability_type="work_hours",
            energy_level=self.default_energy_level,
        )
