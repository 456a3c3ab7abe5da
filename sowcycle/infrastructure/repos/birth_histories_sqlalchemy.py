from __future__ import annotations

from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.application.errors import IntegrityFailure
from sowcycle.domain.models.pig_birth_history import PigBirthHistory
from sowcycle.infrastructure.db.orm.pig_birth_history import PigBirthHistoryORM
from sowcycle.utils.datetime_tz import as_utc


class BirthHistoriesSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PigBirthHistoryORM) -> PigBirthHistory:
        return PigBirthHistory(
            id=orm.id,
            farm_id=orm.farm_id,
            sow_id=orm.sow_id,
            breeding_record_id=orm.breeding_record_id,
            birth_date=orm.birth_date,
            number_of_piglets=orm.number_of_piglets,
            notes=orm.notes,
            deleted_at=as_utc(orm.deleted_at),
            created_at=as_utc(orm.created_at),
        )

    async def add(self, history: PigBirthHistory) -> PigBirthHistory:
        orm = PigBirthHistoryORM(
            id=history.id,
            farm_id=history.farm_id,
            sow_id=history.sow_id,
            breeding_record_id=history.breeding_record_id,
            birth_date=history.birth_date,
            number_of_piglets=history.number_of_piglets,
            notes=history.notes,
            created_at=history.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise IntegrityFailure(
                f"Birth history already exists for breeding record {history.breeding_record_id}"
            ) from exc
        return self._to_domain(orm)

    async def get_for_record(self, breeding_record_id: UUID) -> PigBirthHistory | None:
        stmt = (
            select(PigBirthHistoryORM)
            .where(PigBirthHistoryORM.breeding_record_id == breeding_record_id)
            .where(PigBirthHistoryORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def recent_litter_sizes(self, farm_id: UUID, sow_id: str, limit: int) -> list[int]:
        """Most recent litter sizes first."""
        stmt = (
            select(PigBirthHistoryORM.number_of_piglets)
            .where(PigBirthHistoryORM.farm_id == farm_id)
            .where(PigBirthHistoryORM.sow_id == sow_id)
            .where(PigBirthHistoryORM.deleted_at.is_(None))
            .order_by(desc(PigBirthHistoryORM.birth_date), desc(PigBirthHistoryORM.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [int(n) for n in result.scalars().all()]
