from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import JSON, Boolean, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from autoscheduler.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FlexibleTask(Base):
    __tablename__ = "flexible_tasks"
    __table_args__ = (Index("idx_flexible_tasks_active", "user_id", "is_active"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    energy_level: Mapped[str | None] = mapped_column(String(20), nullable=True, default="medium")
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    preferred_time_start: Mapped[str | None] = mapped_column(String(10), nullable=True)
    preferred_time_end: Mapped[str | None] = mapped_column(String(10), nullable=True)
    specific_days: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
