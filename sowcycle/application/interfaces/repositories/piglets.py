from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sowcycle.domain.models.piglet_record import PigletRecord


class PigletsRepository(Protocol):
    async def add_many(self, piglets: list[PigletRecord]) -> list[PigletRecord]: ...

    async def get(self, farm_id: UUID, piglet_id: UUID) -> PigletRecord | None: ...

    async def update(self, piglet: PigletRecord) -> PigletRecord: ...

    async def count_for_record(self, breeding_record_id: UUID) -> int: ...

    async def list_for_record(self, breeding_record_id: UUID) -> list[PigletRecord]: ...

    async def find_existing_numbers(self, farm_id: UUID, numbers: list[str]) -> list[str]: ...

    async def soft_delete_for_record(self, breeding_record_id: UUID) -> int: ...
