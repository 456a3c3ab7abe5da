from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(slots=True)
class PigletRecord:
    id: UUID
    breeding_record_id: UUID
    farm_id: UUID
    piglet_number: str

    birth_weight: Decimal | None = None
    gender: str | None = None
    color: str | None = None
    status: str = "alive"
    weaning_date: date | None = None
    weaning_weight: Decimal | None = None
    parent_male_id: str | None = None
    parent_female_id: str | None = None
    notes: str | None = None

    created_by: UUID | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        breeding_record_id: UUID,
        farm_id: UUID,
        piglet_number: str,
        weaning_date: date | None = None,
        birth_weight: Decimal | None = None,
        gender: str | None = None,
        color: str | None = None,
        status: str | None = None,
        parent_male_id: str | None = None,
        parent_female_id: str | None = None,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> PigletRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            breeding_record_id=breeding_record_id,
            farm_id=farm_id,
            piglet_number=piglet_number,
            birth_weight=birth_weight,
            gender=gender,
            color=color,
            status=status or "alive",
            weaning_date=weaning_date,
            parent_male_id=parent_male_id,
            parent_female_id=parent_female_id,
            notes=notes,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
