from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping
from uuid import UUID

from sowcycle.application.errors import NotFound, ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.pig import Gender
from sowcycle.domain.models.piglet_record import PigletRecord

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    "weaning_weight",
    "status",
    "notes",
    "parent_male_id",
    "parent_female_id",
    "birth_weight",
    "gender",
    "color",
}


@dataclass(slots=True)
class PigletUpdateResult:
    piglet: PigletRecord
    warnings: list[str] = field(default_factory=list)


def _positive_weight(value: Any, label: str) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        weight = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"{label} must be a positive number") from exc
    if weight <= 0:
        raise ValidationError(f"{label} must be a positive number")
    return weight


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    piglet_id: UUID,
    changes: Mapping[str, Any],
    actor_user_id: UUID | None = None,
) -> PigletUpdateResult:
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

    piglet = await uow.piglets.get(farm_id, piglet_id)
    if not piglet:
        raise NotFound(f"Piglet record {piglet_id} not found")

    warnings: list[str] = []
    # Unknown parents are advisory only; a known female parent must really be a sow
    if changes.get("parent_male_id"):
        male = await uow.pigs.get(farm_id, changes["parent_male_id"])
        if male is None:
            warnings.append(f"Parent male pig {changes['parent_male_id']} not found")
    if changes.get("parent_female_id"):
        female = await uow.pigs.get(farm_id, changes["parent_female_id"])
        if female is None:
            warnings.append(f"Parent female pig {changes['parent_female_id']} not found")
        elif female.gender != Gender.FEMALE.value:
            raise ValidationError("Parent female pig must be a sow (female)")

    if "gender" in changes and changes["gender"] not in {None, *(g.value for g in Gender)}:
        raise ValidationError(f"Invalid gender: {changes['gender']}")
    if "birth_weight" in changes:
        piglet.birth_weight = _positive_weight(changes["birth_weight"], "Birth weight")
    if "weaning_weight" in changes:
        piglet.weaning_weight = _positive_weight(changes["weaning_weight"], "Weaning weight")
    for name in ("status", "notes", "parent_male_id", "parent_female_id", "gender", "color"):
        if name in changes:
            setattr(piglet, name, changes[name])
    if not piglet.status:
        piglet.status = "alive"

    piglet.touch()
    updated = await uow.piglets.update(piglet)
    for warning in warnings:
        logger.warning("Piglet %s updated with advisory: %s", piglet_id, warning)
    logger.info("Piglet record %s updated by user %s", piglet_id, actor_user_id)
    return PigletUpdateResult(piglet=updated, warnings=warnings)
