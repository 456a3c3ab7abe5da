from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sowcycle.application.alerts.scheduler import AlertScheduler
from sowcycle.application.errors import NotFound, ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.alert import AlertStatus, AlertType
from sowcycle.utils.datetime_tz import FarmCalendar

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeleteBreedingRecordOutput:
    id: UUID
    piglets_removed: int = 0
    alerts_rejected: int = 0


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    record_id: UUID,
    calendar: FarmCalendar,
    actor_user_id: UUID | None = None,
) -> DeleteBreedingRecordOutput:
    """Soft delete an unresolved breeding record and unwind its side effects."""
    record = await uow.breeding_records.get(farm_id, record_id)
    if not record:
        raise NotFound(f"Breeding record {record_id} not found")
    if not record.is_open:
        raise ValidationError(
            f"Breeding record {record_id} already has a recorded birth and cannot be deleted"
        )

    record.soft_delete(deleted_by=actor_user_id)
    await uow.breeding_records.delete(record)
    piglets_removed = await uow.piglets.soft_delete_for_record(record.id)

    sow = await uow.pigs.get(farm_id, record.sow_id)
    if sow:
        sow.clear_pregnancy()
        await uow.pigs.update_reproductive_state(sow)

    rejected = await AlertScheduler(uow, calendar).cancel_alerts(
        farm_id,
        record.sow_id,
        [AlertType.BREEDING.value, AlertType.BIRTH.value],
        AlertStatus.REJECTED.value,
    )
    logger.info("Breeding record %s soft deleted by user %s", record_id, actor_user_id)
    return DeleteBreedingRecordOutput(
        id=record.id, piglets_removed=piglets_removed, alerts_rejected=rejected
    )
