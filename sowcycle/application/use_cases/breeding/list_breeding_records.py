from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sowcycle.application.errors import ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.services.gestation import GestationCalculator


@dataclass(slots=True)
class BreedingRecordSummary:
    record: BreedingRecord
    state: str
    is_overdue: bool
    piglet_count: int


@dataclass(slots=True)
class ListBreedingRecordsOutput:
    items: list[BreedingRecordSummary]
    total: int


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    calculator: GestationCalculator,
    grace_days: int = 0,
    limit: int = 50,
    offset: int = 0,
    now: datetime | None = None,
) -> ListBreedingRecordsOutput:
    if limit <= 0 or limit > 200:
        raise ValidationError("limit must be between 1 and 200")
    if offset < 0:
        raise ValidationError("offset must be >= 0")

    records = await uow.breeding_records.list(farm_id, limit=limit, offset=offset)
    total = await uow.breeding_records.count(farm_id)
    items = []
    for record in records:
        overdue = record.is_open and calculator.is_overdue(record.mating_date, grace_days, now)
        items.append(
            BreedingRecordSummary(
                record=record,
                state=record.state.value,
                is_overdue=overdue,
                piglet_count=await uow.piglets.count_for_record(record.id),
            )
        )
    return ListBreedingRecordsOutput(items=items, total=total)
