from __future__ import annotations

import os
import uuid
from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

# IMPORTANT:
# Set env BEFORE importing the app (settings are read at import time)
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from autoscheduler.domain.value_objects.scheduling import (  # noqa: E402
    AvailabilityRule,
    AvailableSlot,
    FixedBooking,
    FlexibleTask,
    ScheduleSuggestion,
    SchedulingPreferences,
    SuggestionDraft,
)
from autoscheduler.services.scheduler.time_utils import time_of_day_bucket, to_minutes  # noqa: E402

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)


class FakeSchedulingStorage:
    """In-memory scheduling storage; records every call the engine makes."""

    def __init__(
        self,
        *,
        rules: list[AvailabilityRule] | None = None,
        bookings: dict[date, list[FixedBooking]] | None = None,
        tasks: list[FlexibleTask] | None = None,
        preferences: SchedulingPreferences | None = None,
        fail_for_task_ids: set[uuid.UUID] | None = None,
        fail_on_rules: bool = False,
    ) -> None:
        self.rules = list(rules or [])
        self.bookings = dict(bookings or {})
        self.tasks = list(tasks or [])
        self.preferences = preferences
        self.fail_for_task_ids = set(fail_for_task_ids or ())
        self.fail_on_rules = fail_on_rules
        self.booking_lookups: list[date] = []
        self.created: list[ScheduleSuggestion] = []

    async def get_availability_rules(self, user_id: uuid.UUID) -> list[AvailabilityRule]:
        if self.fail_on_rules:
            raise RuntimeError("availability store unavailable")
        return list(self.rules)

    async def get_fixed_bookings_for_date(self, user_id: uuid.UUID, day: date) -> list[FixedBooking]:
        self.booking_lookups.append(day)
        return list(self.bookings.get(day, []))

    async def get_flexible_tasks(self, user_id: uuid.UUID, active_only: bool = True) -> list[FlexibleTask]:
        return list(self.tasks)

    async def get_scheduling_preferences(self, user_id: uuid.UUID) -> SchedulingPreferences | None:
        return self.preferences

    async def create_suggestion(self, user_id: uuid.UUID, draft: SuggestionDraft) -> ScheduleSuggestion:
        if draft.flexible_task_id in self.fail_for_task_ids:
            raise RuntimeError("storage unavailable")
        suggestion = ScheduleSuggestion(
            suggestion_id=uuid.uuid4(),
            user_id=user_id,
            flexible_task_id=draft.flexible_task_id,
            suggested_date=draft.suggested_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            confidence_score=draft.confidence_score,
            reasoning=draft.reasoning,
            status=draft.status,
            created_at=datetime.now(timezone.utc),
        )
        self.created.append(suggestion)
        return suggestion

    async def list_suggestions(
        self,
        user_id: uuid.UUID,
        *,
        status: str | None = None,
        start_from: date | None = None,
        start_to: date | None = None,
    ) -> list[ScheduleSuggestion]:
        items = [s for s in self.created if s.user_id == user_id]
        if status:
            items = [s for s in items if s.status == status]
        if start_from:
            items = [s for s in items if s.suggested_date >= start_from]
        if start_to:
            items = [s for s in items if s.suggested_date <= start_to]
        return items


def make_task(**overrides) -> FlexibleTask:
    values = {"task_id": uuid.uuid4(), "title": "Write report", "estimated_duration": 60, "priority": "medium"}
    values.update(overrides)
    return FlexibleTask(**values)


def make_slot(
    start: str = "09:00",
    end: str = "10:00",
    *,
    day: date = MONDAY,
    energy_level: str = "medium",
) -> AvailableSlot:
    start_minutes = to_minutes(start)
    return AvailableSlot(
        date=day,
        start_time=start,
        end_time=end,
        duration_minutes=to_minutes(end) - start_minutes,
        energy_level=energy_level,
        day_of_week=(day.weekday() + 1) % 7,
        time_of_day=time_of_day_bucket(start_minutes),
    )


@pytest.fixture()
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture(scope="session")
def make_headers():
    def _mk(rid: str | None = None, user_id: uuid.UUID | str | None = None) -> dict[str, str]:
        h: dict[str, str] = {}
        if rid is not None:
            h["X-Request-Id"] = rid
        if user_id is not None:
            h["X-User-Id"] = str(user_id)
        return h
    return _mk


@pytest.fixture(scope="session")
def app():
    from autoscheduler.main import app as fastapi_app
    return fastapi_app


@pytest.fixture()
def fake_storage() -> FakeSchedulingStorage:
    return FakeSchedulingStorage(tasks=[make_task()])


@pytest.fixture()
async def client(app, fake_storage):
    from autoscheduler.infrastructure.di_scheduler import get_scheduling_storage

    app.dependency_overrides[get_scheduling_storage] = lambda: fake_storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
async def db_session():
    from autoscheduler.db.init_db import init_db

    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_db(engine)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
