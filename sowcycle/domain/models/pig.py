from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


@dataclass(slots=True)
class Pig:
    id: UUID
    farm_id: UUID
    pig_id: str
    gender: str
    name: str | None = None
    pen_id: UUID | None = None

    # Reproductive state
    is_pregnant: bool = False
    pregnancy_start_date: date | None = None
    expected_birth_date: date | None = None
    actual_birth_date: date | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        pig_id: str,
        gender: str,
        name: str | None = None,
        pen_id: UUID | None = None,
    ) -> Pig:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            pig_id=pig_id,
            gender=gender,
            name=name,
            pen_id=pen_id,
            created_at=now,
            updated_at=now,
        )

    def mark_pregnant(self, mating_date: date, expected_birth_date: date) -> None:
        self.is_pregnant = True
        self.pregnancy_start_date = mating_date
        self.expected_birth_date = expected_birth_date
        self.touch()

    def record_farrowing(self, actual_birth_date: date) -> None:
        self.clear_pregnancy()
        self.actual_birth_date = actual_birth_date

    def clear_pregnancy(self) -> None:
        self.is_pregnant = False
        self.pregnancy_start_date = None
        self.expected_birth_date = None
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
