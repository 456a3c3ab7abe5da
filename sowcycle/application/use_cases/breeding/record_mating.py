from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from sowcycle.application.alerts.scheduler import AlertScheduler, NewAlert
from sowcycle.application.errors import ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.alert import AlertSeverity, AlertType
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.pig import Gender
from sowcycle.domain.services.gestation import GestationCalculator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordMatingInput:
    sow_id: str
    boar_id: str
    mating_date: date | datetime | str
    expected_birth_date: date | datetime | str
    notes: str | None = None
    immediate_notify_date: date | datetime | str | None = None
    alert_message: str | None = None


@dataclass(slots=True)
class RecordMatingOutput:
    record: BreedingRecord
    alert_ids: list[UUID] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordMatingInput,
    calculator: GestationCalculator,
    actor_user_id: UUID | None = None,
) -> RecordMatingOutput:
    if not farm_id or not payload.sow_id or not payload.boar_id:
        raise ValidationError("Missing required breeding record fields")
    if payload.mating_date is None or payload.expected_birth_date is None:
        raise ValidationError("Missing required breeding record fields")

    calendar = calculator.calendar
    mating_date = calendar.parse_date(payload.mating_date, "mating_date")
    expected_birth_date = calendar.parse_date(payload.expected_birth_date, "expected_birth_date")
    if expected_birth_date < mating_date:
        raise ValidationError("expected_birth_date cannot be before mating_date")
    notify_date = mating_date
    if payload.immediate_notify_date is not None:
        notify_date = calendar.parse_date(payload.immediate_notify_date, "immediate_notify_date")

    # Lock the sow row so concurrent matings for the same sow serialize on it
    sow = await uow.pigs.get(farm_id, payload.sow_id, gender=Gender.FEMALE.value, for_update=True)
    if not sow:
        raise ValidationError(f"Sow {payload.sow_id} not found or invalid")
    boar = await uow.pigs.get(farm_id, payload.boar_id, gender=Gender.MALE.value)
    if not boar:
        raise ValidationError(f"Boar {payload.boar_id} not found or invalid")

    open_record = await uow.breeding_records.get_open_for_sow(farm_id, payload.sow_id)
    if open_record:
        raise ValidationError(
            f"Sow {payload.sow_id} already has an open breeding record",
            details={"breeding_record_id": str(open_record.id)},
        )

    last_litter = await uow.breeding_records.get_latest_resolved_for_sow(farm_id, payload.sow_id)
    if last_litter and last_litter.actual_birth_date:
        earliest = calculator.earliest_remating_date(last_litter.actual_birth_date)
        if mating_date < earliest:
            raise ValidationError(
                f"Sow {payload.sow_id} re-mated too soon after weaning; "
                f"earliest allowed mating date is {earliest.isoformat()}",
                details={"earliest_mating_date": earliest.isoformat()},
            )

    record = BreedingRecord.create(
        farm_id=farm_id,
        sow_id=payload.sow_id,
        boar_id=payload.boar_id,
        mating_date=mating_date,
        expected_birth_date=expected_birth_date,
        alert_date=calculator.pregnancy_check_date(mating_date),
        notes=payload.notes,
        created_by=actor_user_id,
    )
    created = await uow.breeding_records.add(record)

    sow.mark_pregnant(mating_date, expected_birth_date)
    await uow.pigs.update_reproductive_state(sow)

    scheduler = AlertScheduler(uow, calendar)
    pen = await scheduler.resolve_pen(farm_id, payload.sow_id)

    default_message = (
        f"Breeding recorded for sow {payload.sow_id} and boar {payload.boar_id} on "
        f"{calendar.format_local_date(mating_date)}. Expected birth date: "
        f"{calendar.format_local_date(expected_birth_date)}"
    )
    alert_ids = [
        await scheduler.create_alert(
            NewAlert(
                farm_id=farm_id,
                pig_id=payload.sow_id,
                pen_id=pen.id if pen else None,
                name=f"Breeding Success for {payload.sow_id} and {payload.boar_id}",
                alert_type=AlertType.BREEDING.value,
                severity=AlertSeverity.MEDIUM.value,
                message=payload.alert_message or default_message,
                alert_start_date=calendar.utc_midnight(mating_date),
                notify_on=[calendar.utc_midnight(notify_date)],
                created_by=actor_user_id,
            )
        )
    ]
    for milestone in calculator.alert_milestones():
        alert_ids.append(
            await scheduler.schedule_milestone(
                farm_id=farm_id,
                sow_id=payload.sow_id,
                pen=pen,
                milestone=milestone,
                anchor=mating_date,
                created_by=actor_user_id,
            )
        )

    logger.info(
        "Breeding record %s created for sow %s by user %s (%d alerts)",
        created.id,
        payload.sow_id,
        actor_user_id,
        len(alert_ids),
    )
    return RecordMatingOutput(record=created, alert_ids=alert_ids)
