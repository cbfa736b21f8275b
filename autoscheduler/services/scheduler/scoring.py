from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from autoscheduler.domain.value_objects.calendar import TimeOfDay
from autoscheduler.domain.value_objects.scheduling import (
    AvailableSlot,
    FlexibleTask,
    ScoredSlot,
    SchedulingPreferences,
)
from autoscheduler.services.scheduler.islot_scorer import ISlotScorer
from autoscheduler.services.scheduler.time_utils import format_duration, round_half_up

PRIORITY_POINTS: dict[str, int] = {"critical": 20, "high": 15, "medium": 10, "low": 5}
HIGH_PRIORITIES = frozenset({"critical", "high"})

ENERGY_MATCH_POINTS: dict[str, dict[str, int]] = {
    "high": {"high": 20, "medium": 10, "low": 5},
    "medium": {"high": 10, "medium": 20, "low": 10},
    "low": {"high": 5, "medium": 10, "low": 20},
}
ENERGY_MATCH_REASON_THRESHOLD = 15

FLAT_NO_PREFERENCES_POINTS = 7
FLAT_NO_DEADLINE_POINTS = 7


@dataclass(frozen=True)
class ScoringContext:
    preferences: SchedulingPreferences | None = None
    used_days: frozenset[date] = frozenset()


@dataclass(frozen=True)
class RuleOutcome:
    points: float
    reason: str | None = None


@dataclass(frozen=True)
class Infeasible:
    reason: str


class ScoringRule(ABC):
    @abstractmethod
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome | Infeasible:
        ...


class PriorityRule(ScoringRule):
    """High priority work is pulled towards mornings; everything else scores its table value."""

    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome:
        points = PRIORITY_POINTS.get(task.priority, PRIORITY_POINTS["medium"])
        if task.priority not in HIGH_PRIORITIES:
            return RuleOutcome(points, f"Priority match (+{points})")
        if slot.time_of_day is TimeOfDay.MORNING:
            return RuleOutcome(points, f"High priority task in peak morning hours (+{points})")
        half = points * 0.5
        return RuleOutcome(half, f"High priority task scheduled (+{round_half_up(half)})")


class EnergyMatchRule(ScoringRule):
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome:
        task_energy = task.energy_level or "medium"
        slot_energy = slot.energy_level or "medium"
        points = ENERGY_MATCH_POINTS.get(task_energy, {}).get(slot_energy, 10)
        if points >= ENERGY_MATCH_REASON_THRESHOLD:
            return RuleOutcome(points, f"Energy level match: {task_energy} task in {slot_energy} energy slot (+{points})")
        return RuleOutcome(points)


class DurationFitRule(ScoringRule):
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome | Infeasible:
        needed = task.estimated_duration
        available = slot.duration_minutes
        if available < needed:
            return Infeasible(
                f"Slot too short: need {format_duration(needed)}, only {format_duration(available)} available"
            )

        excess = available - needed
        if excess == 0:
            return RuleOutcome(20, "Perfect duration fit (+20)")
        if excess <= 15:
            return RuleOutcome(18, "Near-perfect duration fit (+18)")
        if excess <= 30:
            return RuleOutcome(15, f"Good duration fit with {excess}min buffer (+15)")
        points = max(5, 15 - excess // 30)
        return RuleOutcome(points, f"Duration fits with {format_duration(excess)} spare (+{points})")


class TimeOfDayPreferenceRule(ScoringRule):
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome:
        prefs = context.preferences
        if prefs is None:
            return RuleOutcome(FLAT_NO_PREFERENCES_POINTS)
        if prefs.prefer_morning and slot.time_of_day is TimeOfDay.MORNING:
            return RuleOutcome(15, "Morning preference matched (+15)")
        if prefs.prefer_afternoon and slot.time_of_day is TimeOfDay.AFTERNOON:
            return RuleOutcome(15, "Afternoon preference matched (+15)")
        if prefs.prefer_evening and slot.time_of_day is TimeOfDay.EVENING:
            return RuleOutcome(15, "Evening preference matched (+15)")
        return RuleOutcome(5)


class DeadlinePressureRule(ScoringRule):
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome | Infeasible:
        if task.deadline is None:
            return RuleOutcome(FLAT_NO_DEADLINE_POINTS)

        days_left = (task.deadline - slot.date).days
        if days_left < 0:
            return Infeasible("Slot is after deadline")
        if days_left <= 1:
            return RuleOutcome(15, "Urgent: deadline tomorrow or today (+15)")
        if days_left <= 3:
            return RuleOutcome(12, f"Deadline approaching in {days_left} days (+12)")
        if days_left <= 7:
            return RuleOutcome(8, "Deadline within a week (+8)")
        return RuleOutcome(5, "Adequate time before deadline (+5)")


class DaySpreadRule(ScoringRule):
    def evaluate(self, slot: AvailableSlot, task: FlexibleTask, context: ScoringContext) -> RuleOutcome:
        if slot.date not in context.used_days:
            return RuleOutcome(10, "Spreads work across days (+10)")
        return RuleOutcome(3)


# Evaluation order is also the order of the reasoning list.
DEFAULT_RULES: tuple[ScoringRule, ...] = (
    PriorityRule(),
    EnergyMatchRule(),
    DurationFitRule(),
    TimeOfDayPreferenceRule(),
    DeadlinePressureRule(),
    DaySpreadRule(),
)


class SlotScorer(ISlotScorer):
    def __init__(self, rules: Sequence[ScoringRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)

    def score_slot(
        self,
        slot: AvailableSlot,
        task: FlexibleTask,
        preferences: SchedulingPreferences | None = None,
        *,
        used_days: set[date] | frozenset[date] = frozenset(),
    ) -> ScoredSlot:
        context = ScoringContext(preferences=preferences, used_days=frozenset(used_days))
        score: float = 0
        reasoning: list[str] = []
        for rule in self.rules:
            outcome = rule.evaluate(slot, task, context)
            if isinstance(outcome, Infeasible):
                return ScoredSlot.infeasible(slot, outcome.reason)
            score += outcome.points
            if outcome.reason:
                reasoning.append(outcome.reason)
        return ScoredSlot(slot=slot, score=score, reasoning=tuple(reasoning))


_default_scorer = SlotScorer()


def score_slot(
    slot: AvailableSlot,
    task: FlexibleTask,
    preferences: SchedulingPreferences | None = None,
    *,
    used_days: set[date] | frozenset[date] = frozenset(),
) -> ScoredSlot:
    return _default_scorer.score_slot(slot, task, preferences, used_days=used_days)
