from __future__ import annotations

import json
from datetime import date, datetime, time, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy import String, asc, cast, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.application.errors import IntegrityFailure
from sowcycle.domain.models.alert import Alert, AlertStatus
from sowcycle.infrastructure.db.orm.alert import AlertORM
from sowcycle.utils.datetime_tz import as_utc


def _encode_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _decode_instant(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(value))


class AlertsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AlertORM) -> Alert:
        return Alert(
            id=orm.id,
            farm_id=orm.farm_id,
            pig_id=orm.pig_id,
            pen_id=orm.pen_id,
            name=orm.name,
            alert_type=orm.alert_type,
            severity=orm.severity,
            message=orm.message,
            status=orm.status,
            alert_start_date=as_utc(orm.alert_start_date),
            notify_on=[_decode_instant(v) for v in orm.notify_on or []],
            created_by=orm.created_by,
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
        )

    async def add(self, alert: Alert) -> Alert:
        orm = AlertORM(
            id=alert.id,
            farm_id=alert.farm_id,
            pig_id=alert.pig_id,
            pen_id=alert.pen_id,
            name=alert.name,
            alert_type=alert.alert_type,
            severity=alert.severity,
            message=alert.message,
            status=alert.status,
            alert_start_date=alert.alert_start_date,
            notify_on=[_encode_instant(d) for d in alert.notify_on],
            created_by=alert.created_by,
            created_at=alert.created_at,
            updated_at=alert.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise IntegrityFailure(f"Failed to create alert for pig {alert.pig_id}") from exc
        return self._to_domain(orm)

    async def transition_pending(
        self,
        farm_id: UUID,
        pig_id: str,
        alert_types: Iterable[str],
        target_status: str,
    ) -> int:
        stmt = (
            update(AlertORM)
            .where(AlertORM.farm_id == farm_id)
            .where(AlertORM.pig_id == pig_id)
            .where(AlertORM.alert_type.in_(list(alert_types)))
            .where(AlertORM.status == AlertStatus.PENDING.value)
            .values(status=target_status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount or 0)

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        alert_type: str | None = None,
        pig_id: str | None = None,
        due_on: date | None = None,
    ) -> list[Alert]:
        stmt = select(AlertORM).where(AlertORM.farm_id == farm_id)
        if status:
            stmt = stmt.where(AlertORM.status == status)
        if alert_type:
            stmt = stmt.where(AlertORM.alert_type == alert_type)
        if pig_id:
            stmt = stmt.where(AlertORM.pig_id == pig_id)
        if due_on is not None:
            token = json.dumps(_encode_instant(datetime.combine(due_on, time(), timezone.utc)))
            stmt = stmt.where(cast(AlertORM.notify_on, String).like(f"%{token}%"))
        stmt = stmt.order_by(asc(AlertORM.alert_start_date), asc(AlertORM.created_at))
        result = await self.session.execute(stmt)
        alerts = [self._to_domain(orm) for orm in result.scalars().all()]
        if due_on is not None:
            # the LIKE above matches serialized text; confirm against the decoded instants
            alerts = [a for a in alerts if any(d.date() == due_on for d in a.notify_on)]
        return alerts
