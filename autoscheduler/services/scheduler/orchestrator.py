from __future__ import annotations

import time
import uuid
from datetime import date
from typing import Iterable

from autoscheduler.core.config import settings
from autoscheduler.core.logging import log
from autoscheduler.domain.value_objects.scheduling import (
    AvailableSlot,
    FlexibleTask,
    ScheduleGenerationResult,
    ScheduleSuggestion,
    ScoredSlot,
    SchedulingPreferences,
    SuggestionDraft,
    TaskIssue,
)
from autoscheduler.services.observability import record_schedule_run
from autoscheduler.services.scheduler.iavailability_resolver import IAvailabilityResolver
from autoscheduler.services.scheduler.ischeduling_storage import ISchedulingStorage
from autoscheduler.services.scheduler.islot_scorer import ISlotScorer
from autoscheduler.services.scheduler.time_utils import format_duration, round_half_up, to_minutes, to_time_string

NO_SLOTS_IN_RANGE = "No available time slots in the specified date range"
NO_MATCHING_SLOTS = "No suitable time slots found matching task requirements"


def task_sort_key(task: FlexibleTask) -> tuple[int, bool, date]:
    """Priority first, then earliest deadline; tasks without a deadline go last."""
    return (task.priority_rank, task.deadline is None, task.deadline or date.max)


def narrow_to_preferred_window(task: FlexibleTask, slots: list[AvailableSlot]) -> list[AvailableSlot]:
    if not (task.preferred_time_start and task.preferred_time_end):
        return slots
    window_start = to_minutes(task.preferred_time_start)
    window_end = to_minutes(task.preferred_time_end)
    inside = [s for s in slots if s.start_minutes >= window_start and s.end_minutes <= window_end]
    return inside or slots


def narrow_to_specific_days(task: FlexibleTask, slots: list[AvailableSlot]) -> list[AvailableSlot]:
    allowed = task.allowed_weekdays
    if not allowed:
        return slots
    matching = [s for s in slots if s.weekday in allowed]
    return matching or slots


class TaskSchedulingOrchestrator:
    """Greedy, priority-ordered suggestion generator.

    Tasks are processed one at a time. Each task gets up to
    ``suggestions_per_task`` persisted suggestions, and the dates it used bias
    later tasks towards other days through the day-spread rule.
    """

    def __init__(
        self,
        *,
        storage: ISchedulingStorage,
        availability_resolver: IAvailabilityResolver,
        slot_scorer: ISlotScorer,
        suggestions_per_task: int = settings.SCHEDULER_SUGGESTIONS_PER_TASK,
    ) -> None:
        self.storage = storage
        self.availability_resolver = availability_resolver
        self.slot_scorer = slot_scorer
        self.suggestions_per_task = suggestions_per_task

    async def generate_schedule_suggestions(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        task_ids: Iterable[uuid.UUID] | None = None,
    ) -> ScheduleGenerationResult:
        started = time.perf_counter()
        result = ScheduleGenerationResult()

        tasks = await self.storage.get_flexible_tasks(user_id, active_only=True)
        wanted = set(task_ids or [])
        if wanted:
            tasks = [task for task in tasks if task.task_id in wanted]

        result.summary.total_tasks = len(tasks)
        if not tasks:
            return result

        preferences = await self.storage.get_scheduling_preferences(user_id)
        slots = await self.availability_resolver.resolve_available_slots(user_id, start_date, end_date)

        if not slots:
            result.unschedulable.extend(TaskIssue(task_id=task.task_id, reason=NO_SLOTS_IN_RANGE) for task in tasks)
            self._record(user_id, result, started)
            return result

        used_days: set[date] = set()
        for task in sorted(tasks, key=task_sort_key):
            await self._schedule_task(user_id, task, slots, preferences, used_days, result)

        self._record(user_id, result, started)
        return result

    async def _schedule_task(
        self,
        user_id: uuid.UUID,
        task: FlexibleTask,
        slots: list[AvailableSlot],
        preferences: SchedulingPreferences | None,
        used_days: set[date],
        result: ScheduleGenerationResult,
    ) -> None:
        candidates = [slot for slot in slots if slot.duration_minutes >= task.estimated_duration]
        if not candidates:
            result.unschedulable.append(
                TaskIssue(
                    task_id=task.task_id,
                    reason=f"No slots with sufficient duration ({format_duration(task.estimated_duration)} required)",
                )
            )
            return

        if task.deadline is not None:
            candidates = [slot for slot in candidates if slot.date <= task.deadline]
            if not candidates:
                result.conflicts.append(
                    TaskIssue(
                        task_id=task.task_id,
                        reason=f"No available slots before deadline ({task.deadline.isoformat()})",
                    )
                )
                return

        candidates = narrow_to_preferred_window(task, candidates)
        candidates = narrow_to_specific_days(task, candidates)

        top = self.rank_candidates(task, candidates, preferences, used_days)
        if not top:
            result.unschedulable.append(TaskIssue(task_id=task.task_id, reason=NO_MATCHING_SLOTS))
            return

        try:
            created = await self._persist_suggestions(user_id, task, top, used_days)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "schedule_suggestion_persist_failed",
                user_id=str(user_id),
                task_id=str(task.task_id),
                error=str(exc),
            )
            result.conflicts.append(TaskIssue(task_id=task.task_id, reason=f"Error generating suggestions: {exc}"))
            return

        result.suggestions.extend(created)
        result.summary.scheduled_tasks += 1
        result.summary.total_suggestions += len(created)

    def rank_candidates(
        self,
        task: FlexibleTask,
        candidates: list[AvailableSlot],
        preferences: SchedulingPreferences | None,
        used_days: set[date],
    ) -> list[ScoredSlot]:
        scored = [self.slot_scorer.score_slot(slot, task, preferences, used_days=used_days) for slot in candidates]
        feasible = [item for item in scored if item.feasible and item.score > 0]
        feasible.sort(key=lambda item: item.score, reverse=True)
        return feasible[: self.suggestions_per_task]

    async def _persist_suggestions(
        self,
        user_id: uuid.UUID,
        task: FlexibleTask,
        top: list[ScoredSlot],
        used_days: set[date],
    ) -> list[ScheduleSuggestion]:
        created: list[ScheduleSuggestion] = []
        for scored in top:
            suggestion = await self.storage.create_suggestion(user_id, build_suggestion_draft(task, scored))
            created.append(suggestion)
            used_days.add(scored.slot.date)
        return created

    def _record(self, user_id: uuid.UUID, result: ScheduleGenerationResult, started: float) -> None:
        record_schedule_run(
            user_id=str(user_id),
            total_tasks=result.summary.total_tasks,
            scheduled_tasks=result.summary.scheduled_tasks,
            total_suggestions=result.summary.total_suggestions,
            conflicts=len(result.conflicts),
            unschedulable=len(result.unschedulable),
            latency_ms=int((time.perf_counter() - started) * 1000),
        )


def build_suggestion_draft(task: FlexibleTask, scored: ScoredSlot) -> SuggestionDraft:
    slot = scored.slot
    end_minutes = min(slot.start_minutes + task.estimated_duration, slot.end_minutes)
    return SuggestionDraft(
        flexible_task_id=task.task_id,
        suggested_date=slot.date,
        start_time=slot.start_time,
        end_time=to_time_string(end_minutes),
        confidence_score=max(0, min(100, round_half_up(scored.score))),
        reasoning={
            "factors": list(scored.reasoning),
            "totalScore": scored.score,
            "slotInfo": {
                "dayOfWeek": slot.day_of_week,
                "timeOfDay": slot.time_of_day.value,
                "energyLevel": slot.energy_level,
            },
        },
        status="pending",
    )
