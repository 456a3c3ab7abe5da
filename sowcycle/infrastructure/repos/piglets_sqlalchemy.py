from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import asc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.application.errors import IntegrityFailure
from sowcycle.domain.models.piglet_record import PigletRecord
from sowcycle.infrastructure.db.orm.piglet_record import PigletRecordORM
from sowcycle.utils.datetime_tz import as_utc


class PigletsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PigletRecordORM) -> PigletRecord:
        return PigletRecord(
            id=orm.id,
            breeding_record_id=orm.breeding_record_id,
            farm_id=orm.farm_id,
            piglet_number=orm.piglet_number,
            birth_weight=orm.birth_weight,
            gender=orm.gender,
            color=orm.color,
            status=orm.status,
            weaning_date=orm.weaning_date,
            weaning_weight=orm.weaning_weight,
            parent_male_id=orm.parent_male_id,
            parent_female_id=orm.parent_female_id,
            notes=orm.notes,
            created_by=orm.created_by,
            deleted_at=as_utc(orm.deleted_at),
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
        )

    async def add_many(self, piglets: list[PigletRecord]) -> list[PigletRecord]:
        orms = [
            PigletRecordORM(
                id=p.id,
                breeding_record_id=p.breeding_record_id,
                farm_id=p.farm_id,
                piglet_number=p.piglet_number,
                birth_weight=p.birth_weight,
                gender=p.gender,
                color=p.color,
                status=p.status,
                weaning_date=p.weaning_date,
                weaning_weight=p.weaning_weight,
                parent_male_id=p.parent_male_id,
                parent_female_id=p.parent_female_id,
                notes=p.notes,
                created_by=p.created_by,
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in piglets
        ]
        self.session.add_all(orms)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise IntegrityFailure("Duplicate piglet numbers detected") from exc
        return [self._to_domain(orm) for orm in orms]

    async def get(self, farm_id: UUID, piglet_id: UUID) -> PigletRecord | None:
        stmt = (
            select(PigletRecordORM)
            .where(PigletRecordORM.farm_id == farm_id)
            .where(PigletRecordORM.id == piglet_id)
            .where(PigletRecordORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, piglet: PigletRecord) -> PigletRecord:
        orm = await self.session.get(PigletRecordORM, piglet.id)
        if not orm:
            raise ValueError(f"Piglet record {piglet.id} not found")
        orm.birth_weight = piglet.birth_weight
        orm.gender = piglet.gender
        orm.color = piglet.color
        orm.status = piglet.status
        orm.weaning_weight = piglet.weaning_weight
        orm.parent_male_id = piglet.parent_male_id
        orm.parent_female_id = piglet.parent_female_id
        orm.notes = piglet.notes
        orm.updated_at = piglet.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def count_for_record(self, breeding_record_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(PigletRecordORM)
            .where(PigletRecordORM.breeding_record_id == breeding_record_id)
            .where(PigletRecordORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_for_record(self, breeding_record_id: UUID) -> list[PigletRecord]:
        stmt = (
            select(PigletRecordORM)
            .where(PigletRecordORM.breeding_record_id == breeding_record_id)
            .where(PigletRecordORM.deleted_at.is_(None))
            .order_by(asc(PigletRecordORM.piglet_number))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def find_existing_numbers(self, farm_id: UUID, numbers: list[str]) -> list[str]:
        if not numbers:
            return []
        stmt = (
            select(PigletRecordORM.piglet_number)
            .where(PigletRecordORM.farm_id == farm_id)
            .where(PigletRecordORM.piglet_number.in_(numbers))
            .where(PigletRecordORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def soft_delete_for_record(self, breeding_record_id: UUID) -> int:
        now = datetime.now(timezone.utc)
        stmt = (
            update(PigletRecordORM)
            .where(PigletRecordORM.breeding_record_id == breeding_record_id)
            .where(PigletRecordORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount or 0)
