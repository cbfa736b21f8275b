from __future__ import annotations

from autoscheduler.domain.value_objects.scheduling import (
    AvailableSlot,
    ScheduleGenerationResult,
    ScheduleSuggestion,
    TaskIssue,
)
from autoscheduler.schemas.scheduling import (
    AvailableSlotOut,
    ScheduleGenerationOut,
    ScheduleSuggestionOut,
    ScheduleSummaryOut,
    TaskIssueOut,
)


class SchedulingApiMapper:
    """Maps scheduling value objects to response DTOs."""

    def suggestion(self, suggestion: ScheduleSuggestion) -> ScheduleSuggestionOut:
        return ScheduleSuggestionOut(
            id=suggestion.suggestion_id,
            flexible_task_id=suggestion.flexible_task_id,
            suggested_date=suggestion.suggested_date,
            start_time=suggestion.start_time,
            end_time=suggestion.end_time,
            confidence_score=suggestion.confidence_score,
            reasoning=suggestion.reasoning,
            status=suggestion.status,
            created_at=suggestion.created_at,
        )

    def issue(self, issue: TaskIssue) -> TaskIssueOut:
        return TaskIssueOut(task_id=issue.task_id, reason=issue.reason)

    def generation_result(self, result: ScheduleGenerationResult) -> ScheduleGenerationOut:
        return ScheduleGenerationOut(
            suggestions=[self.suggestion(item) for item in result.suggestions],
            conflicts=[self.issue(item) for item in result.conflicts],
            unschedulable=[self.issue(item) for item in result.unschedulable],
            summary=ScheduleSummaryOut(
                total_tasks=result.summary.total_tasks,
                scheduled_tasks=result.summary.scheduled_tasks,
                total_suggestions=result.summary.total_suggestions,
            ),
        )

    def slot(self, slot: AvailableSlot) -> AvailableSlotOut:
        return AvailableSlotOut.model_validate(slot.to_dict())
