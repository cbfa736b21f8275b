from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select

from autoscheduler.infrastructure.di_scheduler import create_schedule_orchestrator
from autoscheduler.infrastructure.repositories.scheduling_storage import SQLSchedulingStorage
from autoscheduler.models.availability import UserAvailability
from autoscheduler.models.flexible_task import FlexibleTask
from autoscheduler.models.schedule_suggestion import ScheduleSuggestion
from autoscheduler.models.scheduling_preferences import SchedulingPreferences
from autoscheduler.models.time_block import TimeBlock
from autoscheduler.repositories import availability_repo, flexible_tasks_repo, preferences_repo, time_blocks_repo
from tests.conftest import MONDAY


async def test_recurring_and_dated_blocks(db_session, user_id):
    await time_blocks_repo.create(
        db_session,
        TimeBlock(
            user_id=user_id,
            title="Standup",
            start_time="09:00",
            end_time="09:30",
            is_recurring=True,
            recurrence_days=["Monday", "thursday"],
        ),
    )
    await time_blocks_repo.create(
        db_session,
        TimeBlock(user_id=user_id, title="Dentist", start_time="15:00", end_time="16:00", block_date=date(2024, 1, 2)),
    )
    await time_blocks_repo.create(
        db_session,
        TimeBlock(user_id=uuid.uuid4(), title="Other user", start_time="10:00", end_time="11:00", block_date=MONDAY),
    )
    await db_session.commit()
    storage = SQLSchedulingStorage(db_session)

    monday = await storage.get_fixed_bookings_for_date(user_id, MONDAY)
    tuesday = await storage.get_fixed_bookings_for_date(user_id, date(2024, 1, 2))

    assert [(b.title, b.start_time, b.end_time) for b in monday] == [("Standup", "09:00", "09:30")]
    assert [(b.title, b.booking_date) for b in tuesday] == [("Dentist", date(2024, 1, 2))]


async def test_inactive_tasks_are_not_loaded(db_session, user_id):
    await flexible_tasks_repo.create(
        db_session, FlexibleTask(user_id=user_id, title="Active", estimated_duration=30, specific_days=["monday"])
    )
    await flexible_tasks_repo.create(
        db_session, FlexibleTask(user_id=user_id, title="Archived", estimated_duration=30, is_active=False)
    )
    await db_session.commit()

    tasks = await SQLSchedulingStorage(db_session).get_flexible_tasks(user_id)

    assert [t.title for t in tasks] == ["Active"]
    assert tasks[0].specific_days == ["monday"]
    assert tasks[0].priority == "medium"


async def test_availability_rules_are_mapped(db_session, user_id):
    rule = await availability_repo.create(
        db_session,
        UserAvailability(user_id=user_id, day_of_week=3, start_time="18:00", end_time="21:00", energy_level="low"),
    )
    await db_session.commit()

    rules = await SQLSchedulingStorage(db_session).get_availability_rules(user_id)

    assert len(rules) == 1
    assert rules[0].rule_id == rule.id
    assert (rules[0].day_of_week, rules[0].start_time, rules[0].end_time) == (3, "18:00", "21:00")
    assert (rules[0].availability_type, rules[0].energy_level) == ("work_hours", "low")


async def test_missing_preferences_are_none(db_session, user_id):
    assert await SQLSchedulingStorage(db_session).get_scheduling_preferences(user_id) is None


async def test_generate_persists_suggestions(db_session, user_id):
    task = await flexible_tasks_repo.create(
        db_session,
        FlexibleTask(user_id=user_id, title="Deep work", estimated_duration=60, priority="high", energy_level="high"),
    )
    await availability_repo.create(
        db_session,
        UserAvailability(user_id=user_id, day_of_week=1, start_time="09:00", end_time="12:00", energy_level="high"),
    )
    await time_blocks_repo.create(
        db_session,
        TimeBlock(user_id=user_id, title="Review", start_time="10:00", end_time="11:00", block_date=MONDAY),
    )
    await preferences_repo.create(db_session, SchedulingPreferences(user_id=user_id, prefer_morning=True))
    await db_session.commit()
    storage = SQLSchedulingStorage(db_session)

    result = await create_schedule_orchestrator(storage).generate_schedule_suggestions(user_id, MONDAY, MONDAY)

    assert result.summary.scheduled_tasks == 1
    assert [(s.start_time, s.end_time) for s in result.suggestions] == [("09:00", "10:00"), ("11:00", "12:00")]
    # priority 15 + energy 20 + duration 20 + morning 15 + no deadline 7 + new day 10
    assert [s.confidence_score for s in result.suggestions] == [87, 87]

    rows = (await db_session.execute(select(ScheduleSuggestion).where(ScheduleSuggestion.user_id == user_id))).scalars().all()
    assert len(rows) == 2
    assert all(row.flexible_task_id == task.id and row.status == "pending" for row in rows)

    listed = await storage.list_suggestions(user_id, status="pending")
    assert [s.start_time for s in listed] == ["09:00", "11:00"]
    assert listed[0].reasoning["slotInfo"]["energyLevel"] == "high"
