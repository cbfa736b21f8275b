from __future__ import annotations

from datetime import date
from enum import Enum, IntEnum


class Weekday(IntEnum):
    """Day of week with Sunday=0, the numbering used by availability rules."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        # date.weekday() is Monday=0
        return cls((value.weekday() + 1) % 7)

    @classmethod
    def from_name(cls, name: str) -> "Weekday" | None:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None


class TimeOfDay(str, Enum):
    NIGHT = "night"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
