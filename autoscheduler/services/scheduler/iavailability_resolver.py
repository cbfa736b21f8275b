from __future__ import annotations

import uuid
from datetime import date
from typing import Protocol

from autoscheduler.domain.value_objects.scheduling import AvailableSlot


class IAvailabilityResolver(Protocol):
    async def resolve_available_slots(self, user_id: uuid.UUID, start_date: date, end_date: date) -> list[AvailableSlot]:
        ...
