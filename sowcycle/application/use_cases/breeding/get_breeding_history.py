from __future__ import annotations

from uuid import UUID

from sowcycle.application.errors import NotFound
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.breeding_record import BreedingRecord


async def execute(uow: UnitOfWork, farm_id: UUID, sow_id: str) -> list[BreedingRecord]:
    sow = await uow.pigs.get(farm_id, sow_id)
    if not sow:
        raise NotFound(f"Pig {sow_id} not found")
    return await uow.breeding_records.list_for_sow(farm_id, sow_id)
