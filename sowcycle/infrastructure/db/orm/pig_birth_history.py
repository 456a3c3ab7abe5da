from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from sowcycle.infrastructure.db.base import Base


class PigBirthHistoryORM(Base):
    __tablename__ = "pig_birth_history"
    __table_args__ = (
        Index("ix_pig_birth_history_farm_sow_date", "farm_id", "sow_id", "birth_date"),
        Index("ux_pig_birth_history_breeding_record", "breeding_record_id", unique=True),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    sow_id: Mapped[str] = mapped_column(String(200), nullable=False)
    breeding_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_records.id"), nullable=False
    )
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    number_of_piglets: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
