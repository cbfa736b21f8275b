from __future__ import annotations

# Import all models so they register on Base.metadata
from autoscheduler.models.availability import UserAvailability  # noqa: F401
from autoscheduler.models.flexible_task import FlexibleTask  # noqa: F401
from autoscheduler.models.schedule_suggestion import ScheduleSuggestion  # noqa: F401
from autoscheduler.models.scheduling_preferences import SchedulingPreferences  # noqa: F401
from autoscheduler.models.time_block import TimeBlock  # noqa: F401
