from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ScheduleGenerateIn(BaseModel):
    start_date: date
    end_date: date
    task_ids: list[uuid.UUID] | None = None


class ScheduleSuggestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    flexible_task_id: uuid.UUID
    suggested_date: date
    start_time: str
    end_time: str
    confidence_score: int = Field(ge=0, le=100)
    reasoning: dict[str, Any] | None = None
    status: Literal["pending", "accepted", "rejected", "completed"] = "pending"
    created_at: datetime | None = None


class TaskIssueOut(BaseModel):
    task_id: uuid.UUID
    reason: str


class ScheduleSummaryOut(BaseModel):
    total_tasks: int
    scheduled_tasks: int
    total_suggestions: int


class ScheduleGenerationOut(BaseModel):
    suggestions: list[ScheduleSuggestionOut] = Field(default_factory=list)
    conflicts: list[TaskIssueOut] = Field(default_factory=list)
    unschedulable: list[TaskIssueOut] = Field(default_factory=list)
    summary: ScheduleSummaryOut


class AvailableSlotOut(BaseModel):
    date: date
    start_time: str
    end_time: str
    duration_minutes: int
    energy_level: str
    day_of_week: int = Field(ge=0, le=6)
    time_of_day: Literal["night", "morning", "afternoon", "evening"]

