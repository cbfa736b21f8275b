from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

from autoscheduler.domain.value_objects.calendar import TimeOfDay, Weekday
from autoscheduler.services.scheduler.time_utils import to_minutes

PRIORITY_RANK: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}
DEFAULT_PRIORITY_RANK = PRIORITY_RANK["medium"]

INFEASIBLE_SCORE = -1


def _ensure_hhmm(value: time | str) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value


def _ensure_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _ensure_uuid(value: uuid.UUID | str | None) -> uuid.UUID | None:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


@dataclass
class AvailabilityRule:
    day_of_week: int
    start_time: str
    end_time: str
    availability_type: str = "work_hours"
    energy_level: str = "medium"
    priority: int = 1
    rule_id: uuid.UUID | None = None

    def __post_init__(self) -> None:
        self.start_time = _ensure_hhmm(self.start_time)
        self.end_time = _ensure_hhmm(self.end_time)
        self.rule_id = _ensure_uuid(self.rule_id)
        if self.day_of_week < 0 or self.day_of_week > 6:
            raise ValueError("day_of_week must be between 0 and 6")


@dataclass
class FixedBooking:
    start_time: str
    end_time: str
    booking_date: date | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        self.start_time = _ensure_hhmm(self.start_time)
        self.end_time = _ensure_hhmm(self.end_time)
        if self.booking_date is not None:
            self.booking_date = _ensure_date(self.booking_date)

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)


@dataclass(frozen=True)
class AvailableSlot:
    date: date
    start_time: str
    end_time: str
    duration_minutes: int
    energy_level: str
    day_of_week: int
    time_of_day: TimeOfDay

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)

    @property
    def weekday(self) -> Weekday:
        return Weekday(self.day_of_week)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_minutes": self.duration_minutes,
            "energy_level": self.energy_level,
            "day_of_week": self.day_of_week,
            "time_of_day": self.time_of_day.value,
        }


@dataclass
class FlexibleTask:
    task_id: uuid.UUID
    estimated_duration: int
    priority: str = "medium"
    title: str = ""
    deadline: date | None = None
    energy_level: str | None = None
    preferred_time_start: str | None = None
    preferred_time_end: str | None = None
    specific_days: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.task_id = _ensure_uuid(self.task_id)
        if self.estimated_duration <= 0:
            raise ValueError("estimated_duration must be positive")
        if self.deadline is not None:
            self.deadline = _ensure_date(self.deadline)
        if self.preferred_time_start is not None:
            self.preferred_time_start = _ensure_hhmm(self.preferred_time_start)
        if self.preferred_time_end is not None:
            self.preferred_time_end = _ensure_hhmm(self.preferred_time_end)
        self.specific_days = list(self.specific_days or [])

    @property
    def priority_rank(self) -> int:
        return PRIORITY_RANK.get(self.priority, DEFAULT_PRIORITY_RANK)

    @property
    def allowed_weekdays(self) -> set[Weekday]:
        """Weekdays named in specific_days; unrecognised names are dropped."""
        days = (Weekday.from_name(name) for name in self.specific_days)
        return {day for day in days if day is not None}


@dataclass(frozen=True)
class SchedulingPreferences:
    prefer_morning: bool = False
    prefer_afternoon: bool = False
    prefer_evening: bool = False


@dataclass(frozen=True)
class ScoredSlot:
    """A candidate slot with its score.

    Infeasible candidates carry ``feasible=False`` and ``INFEASIBLE_SCORE``;
    their reasoning holds only the infeasibility reason.
    """

    slot: AvailableSlot
    score: float
    reasoning: tuple[str, ...]
    feasible: bool = True

    @classmethod
    def infeasible(cls, slot: AvailableSlot, reason: str) -> "ScoredSlot":
        return cls(slot=slot, score=INFEASIBLE_SCORE, reasoning=(reason,), feasible=False)


@dataclass
class SuggestionDraft:
    flexible_task_id: uuid.UUID
    suggested_date: date
    start_time: str
    end_time: str
    confidence_score: int
    reasoning: dict[str, Any]
    status: str = "pending"


@dataclass
class ScheduleSuggestion:
    suggestion_id: uuid.UUID
    user_id: uuid.UUID
    flexible_task_id: uuid.UUID
    suggested_date: date
    start_time: str
    end_time: str
    confidence_score: int
    reasoning: dict[str, Any] | None
    status: str = "pending"
    created_at: datetime | None = None


@dataclass(frozen=True)
class TaskIssue:
    task_id: uuid.UUID
    reason: str


@dataclass
class ScheduleSummary:
    total_tasks: int = 0
    scheduled_tasks: int = 0
    total_suggestions: int = 0


@dataclass
class ScheduleGenerationResult:
    suggestions: list[ScheduleSuggestion] = field(default_factory=list)
    conflicts: list[TaskIssue] = field(default_factory=list)
    unschedulable: list[TaskIssue] = field(default_factory=list)
    summary: ScheduleSummary = field(default_factory=ScheduleSummary)
