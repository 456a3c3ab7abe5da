from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from sowcycle.infrastructure.db.base import Base


class AlertORM(Base):
    __tablename__ = "alerts"
    __table_args__ = (
        Index("ix_alerts_farm_status", "farm_id", "status"),
        Index("ix_alerts_farm_pig_status", "farm_id", "pig_id", "status"),
        Index("ix_alerts_farm_start", "farm_id", "alert_start_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    pig_id: Mapped[str] = mapped_column(String(200), nullable=False)
    pen_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    alert_type: Mapped[str] = mapped_column(String(50), nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    alert_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # ISO-8601 UTC midnight timestamps, e.g. "2025-04-29T00:00:00Z"
    notify_on: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
