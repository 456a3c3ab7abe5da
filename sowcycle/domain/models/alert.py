from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timezone
from enum import Enum
from uuid import UUID, uuid4


class AlertType(str, Enum):
    BREEDING = "breeding"
    BIRTH = "birth"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"


def _is_utc_midnight(value: datetime) -> bool:
    return (
        value.tzinfo is not None
        and value.utcoffset() is not None
        and value.utcoffset().total_seconds() == 0
        and value.timetz().replace(tzinfo=None) == time(0, 0)
    )


@dataclass(slots=True)
class Alert:
    id: UUID
    farm_id: UUID
    pig_id: str
    name: str
    alert_type: str
    severity: str
    message: str
    alert_start_date: datetime
    notify_on: list[datetime]

    pen_id: UUID | None = None
    status: str = AlertStatus.PENDING.value
    created_by: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        pig_id: str,
        name: str,
        alert_type: str,
        severity: str,
        message: str,
        alert_start_date: datetime,
        notify_on: list[datetime],
        pen_id: UUID | None = None,
        created_by: UUID | None = None,
    ) -> Alert:
        if alert_type not in {t.value for t in AlertType}:
            raise ValueError(f"Invalid alert type: {alert_type}")
        if severity not in {s.value for s in AlertSeverity}:
            raise ValueError(f"Invalid alert severity: {severity}")
        if not notify_on:
            raise ValueError("Alert notify_on must not be empty")
        if not all(_is_utc_midnight(d) for d in notify_on):
            raise ValueError("Alert notify_on dates must be UTC midnight timestamps")
        if not _is_utc_midnight(alert_start_date):
            raise ValueError("Alert start date must be a UTC midnight timestamp")
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            pig_id=pig_id,
            pen_id=pen_id,
            name=name,
            alert_type=alert_type,
            severity=severity,
            message=message,
            alert_start_date=alert_start_date,
            notify_on=sorted(set(notify_on)),
            status=AlertStatus.PENDING.value,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == AlertStatus.PENDING.value
