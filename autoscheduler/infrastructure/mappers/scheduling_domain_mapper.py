from __future__ import annotations

import uuid

from autoscheduler.domain.value_objects.scheduling import (
    AvailabilityRule,
    FixedBooking,
    FlexibleTask,
    ScheduleSuggestion,
    SchedulingPreferences,
    SuggestionDraft,
)
from autoscheduler.models.availability import UserAvailability
from autoscheduler.models.flexible_task import FlexibleTask as FlexibleTaskRow
from autoscheduler.models.schedule_suggestion import ScheduleSuggestion as ScheduleSuggestionRow
from autoscheduler.models.scheduling_preferences import SchedulingPreferences as SchedulingPreferencesRow
from autoscheduler.models.time_block import TimeBlock


class SchedulingDomainMapper:
    """Maps ORM rows to scheduling value objects and back."""

    def availability_rule(self, row: UserAvailability) -> AvailabilityRule:
        return AvailabilityRule(
            rule_id=row.id,
            day_of_week=row.day_of_week,
            start_time=row.start_time,
            end_time=row.end_time,
            availability_type=row.availability_type or "work_hours",
            energy_level=row.energy_level or "medium",
            priority=row.priority or 1,
        )

    def fixed_booking(self, row: TimeBlock) -> FixedBooking:
        return FixedBooking(
            start_time=row.start_time,
            end_time=row.end_time,
            booking_date=row.block_date,
            title=row.title,
        )

    def flexible_task(self, row: FlexibleTaskRow) -> FlexibleTask:
        return FlexibleTask(
            task_id=row.id,
            title=row.title,
            estimated_duration=row.estimated_duration,
            priority=row.priority or "medium",
            deadline=row.deadline,
            energy_level=row.energy_level,
            preferred_time_start=row.preferred_time_start,
            preferred_time_end=row.preferred_time_end,
            specific_days=row.specific_days or [],
        )

    def preferences(self, row: SchedulingPreferencesRow) -> SchedulingPreferences:
        return SchedulingPreferences(
            prefer_morning=bool(row.prefer_morning),
            prefer_afternoon=bool(row.prefer_afternoon),
            prefer_evening=bool(row.prefer_evening),
        )

    def suggestion_row(self, user_id: uuid.UUID, draft: SuggestionDraft) -> ScheduleSuggestionRow:
        return ScheduleSuggestionRow(
            user_id=user_id,
            flexible_task_id=draft.flexible_task_id,
            suggested_date=draft.suggested_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            confidence_score=draft.confidence_score,
            reasoning=draft.reasoning,
            status=draft.status,
        )

    def suggestion(self, row: ScheduleSuggestionRow) -> ScheduleSuggestion:
        return ScheduleSuggestion(
            suggestion_id=row.id,
            user_id=row.user_id,
            flexible_task_id=row.flexible_task_id,
            suggested_date=row.suggested_date,
            start_time=row.start_time,
            end_time=row.end_time,
            confidence_score=row.confidence_score,
            reasoning=row.reasoning,
            status=row.status,
            created_at=row.created_at,
        )
