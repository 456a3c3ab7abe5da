from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.domain.models.pen import Pen
from sowcycle.infrastructure.db.orm.pen import PenORM


class PensSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PenORM) -> Pen:
        return Pen(id=orm.id, farm_id=orm.farm_id, name=orm.name)

    async def add(self, pen: Pen) -> Pen:
        orm = PenORM(id=pen.id, farm_id=pen.farm_id, name=pen.name)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, pen_id: UUID) -> Pen | None:
        stmt = (
            select(PenORM)
            .where(PenORM.farm_id == farm_id)
            .where(PenORM.id == pen_id)
            .where(PenORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
