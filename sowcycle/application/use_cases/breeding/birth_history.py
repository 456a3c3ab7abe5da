from __future__ import annotations

from sowcycle.application.errors import ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.pig_birth_history import PigBirthHistory


async def ensure(uow: UnitOfWork, record: BreedingRecord) -> PigBirthHistory:
    """Return the birth history row of a resolved record, creating it on first use."""
    existing = await uow.birth_histories.get_for_record(record.id)
    if existing:
        return existing
    if record.actual_birth_date is None:
        raise ValidationError(f"Breeding record {record.id} has no recorded birth")
    history = PigBirthHistory.create(
        farm_id=record.farm_id,
        sow_id=record.sow_id,
        breeding_record_id=record.id,
        birth_date=record.actual_birth_date,
        number_of_piglets=record.number_of_piglets or 0,
        notes=record.notes,
    )
    return await uow.birth_histories.add(history)
