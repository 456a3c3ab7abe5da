from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BreedingState(str, Enum):
    MATED = "mated"
    RESOLVED = "resolved"


@dataclass(slots=True)
class BreedingRecord:
    id: UUID
    farm_id: UUID
    sow_id: str
    boar_id: str
    mating_date: date
    expected_birth_date: date
    alert_date: date

    actual_birth_date: date | None = None
    number_of_piglets: int | None = None
    notes: str | None = None

    created_by: UUID | None = None
    updated_by: UUID | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        sow_id: str,
        boar_id: str,
        mating_date: date,
        expected_birth_date: date,
        alert_date: date,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> BreedingRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            sow_id=sow_id,
            boar_id=boar_id,
            mating_date=mating_date,
            expected_birth_date=expected_birth_date,
            alert_date=alert_date,
            notes=notes,
            created_by=created_by,
            updated_by=created_by,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_open(self) -> bool:
        return self.actual_birth_date is None

    @property
    def state(self) -> BreedingState:
        return BreedingState.MATED if self.is_open else BreedingState.RESOLVED

    def resolve(
        self,
        actual_birth_date: date,
        number_of_piglets: int,
        notes: str | None = None,
        updated_by: UUID | None = None,
    ) -> None:
        if not self.is_open:
            raise ValueError(f"Breeding record {self.id} is already resolved")
        self.actual_birth_date = actual_birth_date
        self.number_of_piglets = number_of_piglets
        if notes is not None:
            self.notes = notes
        self.updated_by = updated_by
        self.bump_version()

    def soft_delete(self, deleted_by: UUID | None = None) -> None:
        self.deleted_at = datetime.now(timezone.utc)
        self.updated_by = deleted_by
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
