from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.domain.models.pig import Pig
from sowcycle.infrastructure.db.orm.pig import PigORM
from sowcycle.utils.datetime_tz import as_utc


class PigsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PigORM) -> Pig:
        return Pig(
            id=orm.id,
            farm_id=orm.farm_id,
            pig_id=orm.pig_id,
            gender=orm.gender,
            name=orm.name,
            pen_id=orm.pen_id,
            is_pregnant=orm.is_pregnant,
            pregnancy_start_date=orm.pregnancy_start_date,
            expected_birth_date=orm.expected_birth_date,
            actual_birth_date=orm.actual_birth_date,
            deleted_at=as_utc(orm.deleted_at),
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
        )

    async def add(self, pig: Pig) -> Pig:
        orm = PigORM(
            id=pig.id,
            farm_id=pig.farm_id,
            pig_id=pig.pig_id,
            gender=pig.gender,
            name=pig.name,
            pen_id=pig.pen_id,
            is_pregnant=pig.is_pregnant,
            pregnancy_start_date=pig.pregnancy_start_date,
            expected_birth_date=pig.expected_birth_date,
            actual_birth_date=pig.actual_birth_date,
            created_at=pig.created_at,
            updated_at=pig.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(
        self,
        farm_id: UUID,
        pig_id: str,
        *,
        gender: str | None = None,
        for_update: bool = False,
    ) -> Pig | None:
        stmt = (
            select(PigORM)
            .where(PigORM.farm_id == farm_id)
            .where(PigORM.pig_id == pig_id)
            .where(PigORM.deleted_at.is_(None))
        )
        if gender:
            stmt = stmt.where(PigORM.gender == gender)
        if for_update:
            # Serializes concurrent writes for the same sow; ignored by sqlite
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_by_ids(self, farm_id: UUID, pig_ids: list[str]) -> list[Pig]:
        if not pig_ids:
            return []
        stmt = (
            select(PigORM)
            .where(PigORM.farm_id == farm_id)
            .where(PigORM.pig_id.in_(pig_ids))
            .where(PigORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update_reproductive_state(self, pig: Pig) -> Pig:
        orm = await self.session.get(PigORM, pig.id)
        if not orm:
            raise ValueError(f"Pig {pig.pig_id} not found")
        orm.is_pregnant = pig.is_pregnant
        orm.pregnancy_start_date = pig.pregnancy_start_date
        orm.expected_birth_date = pig.expected_birth_date
        orm.actual_birth_date = pig.actual_birth_date
        orm.updated_at = pig.updated_at
        await self.session.flush()
        return self._to_domain(orm)
