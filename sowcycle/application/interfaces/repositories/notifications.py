from __future__ import annotations

from typing import Protocol

from sowcycle.domain.models.notification import Notification


class NotificationsRepository(Protocol):
    async def add(self, notification: Notification) -> Notification: ...
