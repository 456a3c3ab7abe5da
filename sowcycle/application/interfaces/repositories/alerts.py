from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol
from uuid import UUID

from sowcycle.domain.models.alert import Alert


class AlertsRepository(Protocol):
    async def add(self, alert: Alert) -> Alert: ...

    async def transition_pending(
        self,
        farm_id: UUID,
        pig_id: str,
        alert_types: Iterable[str],
        target_status: str,
    ) -> int: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        alert_type: str | None = None,
        pig_id: str | None = None,
        due_on: date | None = None,
    ) -> list[Alert]: ...
