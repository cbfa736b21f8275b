from __future__ import annotations

import math

from autoscheduler.domain.value_objects.calendar import TimeOfDay

MINUTES_PER_DAY = 24 * 60

MORNING_START = 6 * 60
AFTERNOON_START = 12 * 60
EVENING_START = 17 * 60
NIGHT_START = 21 * 60


def to_minutes(value: str) -> int:
    hours, _, minutes = value.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def to_time_string(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_of_day_bucket(minutes: int) -> TimeOfDay:
    if minutes < MORNING_START:
        return TimeOfDay.NIGHT
    if minutes < AFTERNOON_START:
        return TimeOfDay.MORNING
    if minutes < EVENING_START:
        return TimeOfDay.AFTERNOON
    if minutes < NIGHT_START:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Strict overlap: intervals that only touch at an endpoint do not overlap."""
    return a_start < b_end and b_start < a_end


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
