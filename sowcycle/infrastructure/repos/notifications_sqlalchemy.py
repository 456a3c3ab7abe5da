from __future__ import annotations

import json

from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.domain.models.notification import Notification
from sowcycle.infrastructure.db.orm.notification import NotificationORM
from sowcycle.utils.datetime_tz import as_utc


class NotificationsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: NotificationORM) -> Notification:
        data = json.loads(orm.data) if orm.data else None
        return Notification(
            id=orm.id,
            farm_id=orm.farm_id,
            user_id=orm.user_id,
            type=orm.type,
            title=orm.title,
            message=orm.message,
            data=data,
            priority=orm.priority,
            read=orm.read,
            created_at=as_utc(orm.created_at),
            read_at=as_utc(orm.read_at),
        )

    def _to_orm(self, notification: Notification) -> NotificationORM:
        data_str = json.dumps(notification.data) if notification.data else None
        return NotificationORM(
            id=notification.id,
            farm_id=notification.farm_id,
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            data=data_str,
            priority=notification.priority,
            read=notification.read,
            created_at=notification.created_at,
            read_at=notification.read_at,
        )

    async def add(self, notification: Notification) -> Notification:
        orm = self._to_orm(notification)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)
