from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autoscheduler.db.session import get_db
from autoscheduler.infrastructure.repositories.scheduling_storage import SQLSchedulingStorage
from autoscheduler.services.scheduler.availability import AvailabilityResolver
from autoscheduler.services.scheduler.orchestrator import TaskSchedulingOrchestrator
from autoscheduler.services.scheduler.scoring import SlotScorer


def create_scheduling_storage(db: AsyncSession) -> SQLSchedulingStorage:
    return SQLSchedulingStorage(db)


def create_schedule_orchestrator(storage: SQLSchedulingStorage) -> TaskSchedulingOrchestrator:
    return TaskSchedulingOrchestrator(
        storage=storage,
        availability_resolver=AvailabilityResolver(storage),
        slot_scorer=SlotScorer(),
    )


def get_scheduling_storage(db: AsyncSession = Depends(get_db)) -> SQLSchedulingStorage:
    return create_scheduling_storage(db)


def get_availability_resolver(
    storage: SQLSchedulingStorage = Depends(get_scheduling_storage),
) -> AvailabilityResolver:
    return AvailabilityResolver(storage)


def get_schedule_orchestrator(
    storage: SQLSchedulingStorage = Depends(get_scheduling_storage),
) -> TaskSchedulingOrchestrator:
    return create_schedule_orchestrator(storage)
