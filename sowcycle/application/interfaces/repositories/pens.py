from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sowcycle.domain.models.pen import Pen


class PensRepository(Protocol):
    async def add(self, pen: Pen) -> Pen: ...

    async def get(self, farm_id: UUID, pen_id: UUID) -> Pen | None: ...
