from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from sowcycle.infrastructure.db.base import Base

OPEN_RECORD_PREDICATE = "actual_birth_date IS NULL AND deleted_at IS NULL"


class BreedingRecordORM(Base):
    __tablename__ = "breeding_records"
    __table_args__ = (
        Index("ix_breeding_records_farm_sow_mating", "farm_id", "sow_id", "mating_date"),
        # At most one unresolved record per sow
        Index(
            "ux_breeding_records_open_per_sow",
            "farm_id",
            "sow_id",
            unique=True,
            postgresql_where=text(OPEN_RECORD_PREDICATE),
            sqlite_where=text(OPEN_RECORD_PREDICATE),
        ),
        CheckConstraint("number_of_piglets >= 0", name="ck_breeding_records_litter_size"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    sow_id: Mapped[str] = mapped_column(String(200), nullable=False)
    boar_id: Mapped[str] = mapped_column(String(200), nullable=False)
    mating_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_piglets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    alert_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    updated_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
