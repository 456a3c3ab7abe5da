from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sowcycle.domain.models.pig_birth_history import PigBirthHistory


class BirthHistoriesRepository(Protocol):
    async def add(self, history: PigBirthHistory) -> PigBirthHistory: ...

    async def get_for_record(self, breeding_record_id: UUID) -> PigBirthHistory | None: ...

    async def recent_litter_sizes(self, farm_id: UUID, sow_id: str, limit: int) -> list[int]: ...
