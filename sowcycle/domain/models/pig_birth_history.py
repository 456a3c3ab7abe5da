from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class PigBirthHistory:
    id: UUID
    farm_id: UUID
    sow_id: str
    breeding_record_id: UUID
    birth_date: date
    number_of_piglets: int
    notes: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        sow_id: str,
        breeding_record_id: UUID,
        birth_date: date,
        number_of_piglets: int,
        notes: str | None = None,
    ) -> PigBirthHistory:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            sow_id=sow_id,
            breeding_record_id=breeding_record_id,
            birth_date=birth_date,
            number_of_piglets=number_of_piglets,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
