from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from autoscheduler.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SchedulingPreferences(Base):
    __tablename__ = "scheduling_preferences"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, unique=True)

    prefer_morning: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    prefer_afternoon: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    prefer_evening: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
