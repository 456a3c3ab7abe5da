from __future__ import annotations

from typing import Protocol

from sowcycle.application.interfaces.repositories.alerts import AlertsRepository
from sowcycle.application.interfaces.repositories.birth_histories import (
    BirthHistoriesRepository,
)
from sowcycle.application.interfaces.repositories.breeding_records import (
    BreedingRecordsRepository,
)
from sowcycle.application.interfaces.repositories.notifications import NotificationsRepository
from sowcycle.application.interfaces.repositories.pens import PensRepository
from sowcycle.application.interfaces.repositories.piglets import PigletsRepository
from sowcycle.application.interfaces.repositories.pigs import PigsRepository


class UnitOfWork(Protocol):
    pigs: PigsRepository
    pens: PensRepository
    breeding_records: BreedingRecordsRepository
    alerts: AlertsRepository
    piglets: PigletsRepository
    birth_histories: BirthHistoriesRepository
    notifications: NotificationsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
