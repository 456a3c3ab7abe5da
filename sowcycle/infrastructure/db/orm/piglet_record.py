from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from sowcycle.infrastructure.db.base import Base


class PigletRecordORM(Base):
    __tablename__ = "piglet_records"
    __table_args__ = (
        Index("ix_piglet_records_breeding_record", "breeding_record_id"),
        Index(
            "ux_piglet_records_farm_number",
            "farm_id",
            "piglet_number",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    breeding_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_records.id"), nullable=False
    )
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    piglet_number: Mapped[str] = mapped_column(String(50), nullable=False)
    birth_weight: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(6), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="alive")
    weaning_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    weaning_weight: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    parent_male_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    parent_female_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
