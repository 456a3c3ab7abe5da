from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sowcycle.domain.models.pig import Pig


class PigsRepository(Protocol):
    async def add(self, pig: Pig) -> Pig: ...

    async def get(
        self,
        farm_id: UUID,
        pig_id: str,
        *,
        gender: str | None = None,
        for_update: bool = False,
    ) -> Pig | None: ...

    async def list_by_ids(self, farm_id: UUID, pig_ids: list[str]) -> list[Pig]: ...

    async def update_reproductive_state(self, pig: Pig) -> Pig: ...
