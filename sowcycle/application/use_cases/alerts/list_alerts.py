from __future__ import annotations

from datetime import date
from uuid import UUID

from sowcycle.application.errors import ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.alert import Alert, AlertStatus, AlertType


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    status: str | None = None,
    alert_type: str | None = None,
    pig_id: str | None = None,
    due_on: date | None = None,
) -> list[Alert]:
    """Farm alerts; `due_on` keeps only alerts whose notify-on set holds that UTC date."""
    if status is not None and status not in {s.value for s in AlertStatus}:
        raise ValidationError(f"Invalid alert status: {status}")
    if alert_type is not None and alert_type not in {t.value for t in AlertType}:
        raise ValidationError(f"Invalid alert type: {alert_type}")
    return await uow.alerts.list(
        farm_id, status=status, alert_type=alert_type, pig_id=pig_id, due_on=due_on
    )
