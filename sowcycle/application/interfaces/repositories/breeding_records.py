from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sowcycle.domain.models.breeding_record import BreedingRecord


class BreedingRecordsRepository(Protocol):
    async def add(self, record: BreedingRecord) -> BreedingRecord: ...

    async def update(self, record: BreedingRecord) -> BreedingRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None: ...

    async def get_open_for_sow(self, farm_id: UUID, sow_id: str) -> BreedingRecord | None: ...

    async def get_latest_resolved_for_sow(
        self, farm_id: UUID, sow_id: str
    ) -> BreedingRecord | None: ...

    async def list_for_sow(self, farm_id: UUID, sow_id: str) -> list[BreedingRecord]: ...

    async def list(
        self, farm_id: UUID, *, limit: int | None = None, offset: int = 0
    ) -> list[BreedingRecord]: ...

    async def count(self, farm_id: UUID) -> int: ...

    async def delete(self, record: BreedingRecord) -> None: ...
