from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from sowcycle.application.errors import NotFound
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.piglet_record import PigletRecord


@dataclass(slots=True)
class BreedingRecordDetail:
    record: BreedingRecord
    piglets: list[PigletRecord] = field(default_factory=list)


async def execute(uow: UnitOfWork, farm_id: UUID, record_id: UUID) -> BreedingRecordDetail:
    record = await uow.breeding_records.get(farm_id, record_id)
    if not record:
        raise NotFound(f"Breeding record {record_id} not found")
    piglets = await uow.piglets.list_for_record(record.id)
    return BreedingRecordDetail(record=record, piglets=piglets)
