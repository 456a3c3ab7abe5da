from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from sowcycle.application.alerts.scheduler import AlertScheduler
from sowcycle.application.errors import NotFound, ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.application.notifications.factory import build_notification
from sowcycle.application.notifications.types import NotificationType
from sowcycle.application.use_cases.breeding import birth_history
from sowcycle.domain.models.alert import AlertStatus, AlertType
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.notification import Notification
from sowcycle.domain.services import culling
from sowcycle.domain.services.gestation import GestationCalculator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordBirthOutcomeInput:
    record_id: UUID
    actual_birth_date: date | datetime | str
    number_of_piglets: int
    notes: str | None = None


@dataclass(slots=True)
class RecordBirthOutcomeOutput:
    record: BreedingRecord
    culling: culling.CullingDecision
    completed_alerts: int = 0
    alert_ids: list[UUID] = field(default_factory=list)
    notification_ids: list[UUID] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordBirthOutcomeInput,
    calculator: GestationCalculator,
    actor_user_id: UUID | None = None,
) -> RecordBirthOutcomeOutput:
    record = await uow.breeding_records.get(farm_id, payload.record_id)
    if not record:
        raise NotFound(f"Breeding record {payload.record_id} not found")
    if not record.is_open:
        raise ValidationError(f"Birth outcome already recorded for breeding record {record.id}")

    calendar = calculator.calendar
    actual_birth_date = calendar.parse_date(payload.actual_birth_date, "actual_birth_date")
    if actual_birth_date < record.mating_date:
        raise ValidationError("actual_birth_date cannot be before mating_date")
    litter_size = payload.number_of_piglets
    if isinstance(litter_size, bool) or not isinstance(litter_size, int) or litter_size < 0:
        raise ValidationError("number_of_piglets must be a non-negative integer")

    profile = calculator.profile
    past_litters = await uow.birth_histories.recent_litter_sizes(
        farm_id, record.sow_id, limit=profile.culling_history_depth
    )
    decision = culling.evaluate(profile, record.sow_id, past_litters, litter_size)
    notification_ids: list[UUID] = []
    for flag in decision.flags:
        logger.info("Sow %s flagged for culling: %s", record.sow_id, flag.reason.value)
        if actor_user_id is None:
            logger.warning(
                "Culling flag for sow %s has no recipient; notification skipped", record.sow_id
            )
            continue
        built = build_notification(
            NotificationType.CULLING_ALERT,
            sow_id=record.sow_id,
            farm_id=farm_id,
            reason=flag.reason,
            message=flag.message,
            breeding_record_id=record.id,
            litter_size=litter_size,
            litter_history=decision.litter_history,
        )
        saved = await uow.notifications.add(
            Notification.create(
                farm_id=farm_id,
                user_id=actor_user_id,
                type=built.type,
                title=built.title,
                message=built.message,
                data=built.data,
                priority=built.priority,
            )
        )
        notification_ids.append(saved.id)

    sow = await uow.pigs.get(farm_id, record.sow_id)
    if sow:
        sow.record_farrowing(actual_birth_date)
        await uow.pigs.update_reproductive_state(sow)
    else:
        logger.warning("Sow %s of breeding record %s no longer exists", record.sow_id, record.id)

    scheduler = AlertScheduler(uow, calendar)
    completed = await scheduler.cancel_alerts(
        farm_id,
        record.sow_id,
        [AlertType.BREEDING.value, AlertType.BIRTH.value],
        AlertStatus.COMPLETED.value,
    )

    pen = await scheduler.resolve_pen(farm_id, record.sow_id)
    alert_ids = [
        await scheduler.schedule_milestone(
            farm_id=farm_id,
            sow_id=record.sow_id,
            pen=pen,
            milestone=milestone,
            anchor=actual_birth_date,
            created_by=actor_user_id,
        )
        for milestone in profile.post_birth_milestones
    ]

    record.resolve(actual_birth_date, litter_size, payload.notes, updated_by=actor_user_id)
    updated = await uow.breeding_records.update(record)
    await birth_history.ensure(uow, updated)

    logger.info("Breeding record %s updated by user %s", record.id, actor_user_id)
    return RecordBirthOutcomeOutput(
        record=updated,
        culling=decision,
        completed_alerts=completed,
        alert_ids=alert_ids,
        notification_ids=notification_ids,
    )
