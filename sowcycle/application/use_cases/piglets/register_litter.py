from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from sowcycle.application.alerts.scheduler import AlertScheduler, NewAlert
from sowcycle.application.errors import NotFound, ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.application.use_cases.breeding import birth_history
from sowcycle.domain.models.alert import AlertSeverity, AlertType
from sowcycle.domain.models.pig import Gender
from sowcycle.domain.models.pig_birth_history import PigBirthHistory
from sowcycle.domain.models.piglet_record import PigletRecord
from sowcycle.domain.services.gestation import GestationCalculator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PigletInput:
    piglet_number: str
    breeding_record_id: UUID | None = None
    birth_weight: Decimal | None = None
    gender: str | None = None
    color: str | None = None
    status: str | None = None
    parent_male_id: str | None = None
    parent_female_id: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class RegisterLitterInput:
    breeding_record_id: UUID
    piglets: list[PigletInput]


@dataclass(slots=True)
class RegisterLitterOutput:
    piglets: list[PigletRecord]
    birth_history: PigBirthHistory
    relocation_alert_id: UUID | None = None
    warnings: list[str] = field(default_factory=list)


def _validate_entries(payload: RegisterLitterInput) -> list[str]:
    if not payload.piglets:
        raise ValidationError("piglets array is required and must not be empty")
    numbers = []
    for piglet in payload.piglets:
        number = (piglet.piglet_number or "").strip()
        if not number:
            raise ValidationError("piglet_number is required for each piglet")
        if piglet.breeding_record_id and piglet.breeding_record_id != payload.breeding_record_id:
            raise ValidationError(
                f"Piglet {number} references breeding record {piglet.breeding_record_id}, "
                f"expected {payload.breeding_record_id}"
            )
        if piglet.birth_weight is not None and piglet.birth_weight <= 0:
            raise ValidationError(f"Birth weight of piglet {number} must be a positive number")
        if piglet.gender is not None and piglet.gender not in {g.value for g in Gender}:
            raise ValidationError(f"Invalid gender for piglet {number}: {piglet.gender}")
        numbers.append(number)
    repeated = sorted(n for n, c in Counter(numbers).items() if c > 1)
    if repeated:
        raise ValidationError(f"Duplicate piglet numbers: {', '.join(repeated)}")
    return numbers


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RegisterLitterInput,
    calculator: GestationCalculator,
    actor_user_id: UUID | None = None,
) -> RegisterLitterOutput:
    numbers = _validate_entries(payload)

    record = await uow.breeding_records.get(farm_id, payload.breeding_record_id)
    if not record:
        raise NotFound(f"Breeding record {payload.breeding_record_id} not found")
    if record.actual_birth_date is None:
        raise ValidationError(
            f"Birth outcome must be recorded for breeding record {record.id} "
            "before registering piglets"
        )

    already_registered = await uow.piglets.count_for_record(record.id)
    allowed = (record.number_of_piglets or 0) + calculator.profile.litter_size_tolerance
    if already_registered + len(numbers) > allowed:
        raise ValidationError(
            f"Total piglets significantly exceed breeding record litter size for breeding "
            f"record {record.id}",
            details={
                "litter_size": record.number_of_piglets,
                "already_registered": already_registered,
                "submitted": len(numbers),
            },
        )

    duplicates = await uow.piglets.find_existing_numbers(farm_id, numbers)
    if duplicates:
        raise ValidationError(f"Duplicate piglet numbers: {', '.join(sorted(duplicates))}")

    warnings: list[str] = []
    parent_ids = sorted(
        {pid for p in payload.piglets for pid in (p.parent_male_id, p.parent_female_id) if pid}
    )
    if parent_ids:
        found = {pig.pig_id: pig for pig in await uow.pigs.list_by_ids(farm_id, parent_ids)}
        missing = [pid for pid in parent_ids if pid not in found]
        if missing:
            raise ValidationError(f"Invalid parent IDs: {', '.join(missing)}")
        for piglet in payload.piglets:
            female_id = piglet.parent_female_id
            if female_id:
                if found[female_id].gender != Gender.FEMALE.value:
                    raise ValidationError(f"Parent female ID {female_id} is not a sow")
                if female_id != record.sow_id:
                    raise ValidationError(
                        f"Breeding record {record.id} does not match sow {female_id}"
                    )
            male_id = piglet.parent_male_id
            if male_id:
                if found[male_id].gender != Gender.MALE.value:
                    raise ValidationError(f"Parent male ID {male_id} is not a boar")
                if male_id != record.boar_id:
                    warnings.append(
                        f"Piglet {piglet.piglet_number.strip()}: male parent {male_id} differs "
                        f"from breeding record boar {record.boar_id}"
                    )

    history = await birth_history.ensure(uow, record)
    weaning_date = calculator.weaning_date(record.actual_birth_date)
    piglets = [
        PigletRecord.create(
            breeding_record_id=record.id,
            farm_id=farm_id,
            piglet_number=number,
            weaning_date=weaning_date,
            birth_weight=piglet.birth_weight,
            gender=piglet.gender,
            color=piglet.color,
            status=piglet.status,
            parent_male_id=piglet.parent_male_id or record.boar_id,
            parent_female_id=piglet.parent_female_id or record.sow_id,
            notes=piglet.notes,
            created_by=actor_user_id,
        )
        for number, piglet in zip(numbers, payload.piglets)
    ]
    created = await uow.piglets.add_many(piglets)

    relocation_alert_id = None
    if already_registered == 0:
        calendar = calculator.calendar
        scheduler = AlertScheduler(uow, calendar)
        pen = await scheduler.resolve_pen(farm_id, record.sow_id)
        relocation_alert_id = await scheduler.create_alert(
            NewAlert(
                farm_id=farm_id,
                pig_id=record.sow_id,
                pen_id=pen.id if pen else None,
                name=f"Relocate Piglets for {record.sow_id}",
                alert_type=AlertType.BIRTH.value,
                severity=AlertSeverity.MEDIUM.value,
                message=(
                    f"Relocate piglets for pig {record.sow_id} to individual pens by "
                    f"{calendar.format_local_date(weaning_date)}"
                ),
                alert_start_date=calendar.utc_midnight(weaning_date),
                created_by=actor_user_id,
            )
        )

    logger.info(
        "Created %d piglets for breeding record %s on farm %s by user %s",
        len(created),
        record.id,
        farm_id,
        actor_user_id,
    )
    return RegisterLitterOutput(
        piglets=created,
        birth_history=history,
        relocation_alert_id=relocation_alert_id,
        warnings=warnings,
    )
