from __future__ import annotations

from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sowcycle.application.errors import IntegrityFailure
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.infrastructure.db.orm.breeding_record import BreedingRecordORM
from sowcycle.utils.datetime_tz import as_utc


class BreedingRecordsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingRecordORM) -> BreedingRecord:
        return BreedingRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            sow_id=orm.sow_id,
            boar_id=orm.boar_id,
            mating_date=orm.mating_date,
            expected_birth_date=orm.expected_birth_date,
            alert_date=orm.alert_date,
            actual_birth_date=orm.actual_birth_date,
            number_of_piglets=orm.number_of_piglets,
            notes=orm.notes,
            created_by=orm.created_by,
            updated_by=orm.updated_by,
            deleted_at=as_utc(orm.deleted_at),
            created_at=as_utc(orm.created_at),
            updated_at=as_utc(orm.updated_at),
            version=orm.version,
        )

    def _base_query(self, farm_id: UUID):
        return (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.deleted_at.is_(None))
        )

    async def add(self, record: BreedingRecord) -> BreedingRecord:
        orm = BreedingRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            sow_id=record.sow_id,
            boar_id=record.boar_id,
            mating_date=record.mating_date,
            expected_birth_date=record.expected_birth_date,
            alert_date=record.alert_date,
            actual_birth_date=record.actual_birth_date,
            number_of_piglets=record.number_of_piglets,
            notes=record.notes,
            created_by=record.created_by,
            updated_by=record.updated_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise IntegrityFailure(
                f"Sow {record.sow_id} already has an open breeding record",
                details={"sow_id": record.sow_id},
            ) from exc
        return self._to_domain(orm)

    async def update(self, record: BreedingRecord) -> BreedingRecord:
        orm = await self.session.get(BreedingRecordORM, record.id)
        if not orm:
            raise ValueError(f"Breeding record {record.id} not found")
        orm.actual_birth_date = record.actual_birth_date
        orm.number_of_piglets = record.number_of_piglets
        orm.notes = record.notes
        orm.updated_by = record.updated_by
        orm.deleted_at = record.deleted_at
        orm.updated_at = record.updated_at
        orm.version = record.version
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise IntegrityFailure(f"Failed to update breeding record {record.id}") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None:
        stmt = self._base_query(farm_id).where(BreedingRecordORM.id == record_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_open_for_sow(self, farm_id: UUID, sow_id: str) -> BreedingRecord | None:
        stmt = (
            self._base_query(farm_id)
            .where(BreedingRecordORM.sow_id == sow_id)
            .where(BreedingRecordORM.actual_birth_date.is_(None))
            .order_by(desc(BreedingRecordORM.mating_date))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_latest_resolved_for_sow(
        self, farm_id: UUID, sow_id: str
    ) -> BreedingRecord | None:
        stmt = (
            self._base_query(farm_id)
            .where(BreedingRecordORM.sow_id == sow_id)
            .where(BreedingRecordORM.actual_birth_date.is_not(None))
            .order_by(desc(BreedingRecordORM.actual_birth_date))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_sow(self, farm_id: UUID, sow_id: str) -> list[BreedingRecord]:
        stmt = (
            self._base_query(farm_id)
            .where(BreedingRecordORM.sow_id == sow_id)
            .order_by(desc(BreedingRecordORM.mating_date), desc(BreedingRecordORM.created_at))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list(
        self, farm_id: UUID, *, limit: int | None = None, offset: int = 0
    ) -> list[BreedingRecord]:
        stmt = self._base_query(farm_id).order_by(
            desc(BreedingRecordORM.mating_date), desc(BreedingRecordORM.created_at)
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(self, farm_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete(self, record: BreedingRecord) -> None:
        orm = await self.session.get(BreedingRecordORM, record.id)
        if not orm:
            return
        orm.deleted_at = record.deleted_at
        orm.updated_by = record.updated_by
        orm.updated_at = record.updated_at
        orm.version = record.version
        await self.session.flush()
