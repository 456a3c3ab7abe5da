from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sowcycle.application.errors import IntegrityFailure
from sowcycle.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._clear_repos()

    def _clear_repos(self) -> None:
        self.pigs = None
        self.pens = None
        self.breeding_records = None
        self.alerts = None
        self.piglets = None
        self.birth_histories = None
        self.notifications = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from sowcycle.infrastructure.repos.alerts_sqlalchemy import AlertsSQLAlchemyRepository
        from sowcycle.infrastructure.repos.birth_histories_sqlalchemy import (
            BirthHistoriesSQLAlchemyRepository,
        )
        from sowcycle.infrastructure.repos.breeding_records_sqlalchemy import (
            BreedingRecordsSQLAlchemyRepository,
        )
        from sowcycle.infrastructure.repos.notifications_sqlalchemy import (
            NotificationsSQLAlchemyRepository,
        )
        from sowcycle.infrastructure.repos.pens_sqlalchemy import PensSQLAlchemyRepository
        from sowcycle.infrastructure.repos.piglets_sqlalchemy import PigletsSQLAlchemyRepository
        from sowcycle.infrastructure.repos.pigs_sqlalchemy import PigsSQLAlchemyRepository

        self.pigs = PigsSQLAlchemyRepository(self.session)
        self.pens = PensSQLAlchemyRepository(self.session)
        self.breeding_records = BreedingRecordsSQLAlchemyRepository(self.session)
        self.alerts = AlertsSQLAlchemyRepository(self.session)
        self.piglets = PigletsSQLAlchemyRepository(self.session)
        self.birth_histories = BirthHistoriesSQLAlchemyRepository(self.session)
        self.notifications = NotificationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear_repos()

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise IntegrityFailure("Transaction rejected by a uniqueness constraint") from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
