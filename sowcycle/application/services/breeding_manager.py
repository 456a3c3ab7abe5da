from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, TypeVar
from uuid import UUID

from sowcycle.application.errors import AppError, ConflictError, IntegrityFailure
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.application.use_cases.breeding import (
    delete_breeding_record,
    get_breeding_history,
    record_birth_outcome,
    record_mating,
)
from sowcycle.application.use_cases.piglets import register_litter, update_piglet
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.piglet_record import PigletRecord
from sowcycle.domain.services.gestation import GestationCalculator

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _describe(context: dict[str, Any]) -> str:
    return ", ".join(f"{k}={v}" for k, v in context.items())


@dataclass(slots=True)
class RegisterLitterResult:
    success: bool
    registered_count: int = 0
    data: list[PigletRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    message: str | None = None


class BreedingRecordManager:
    """Entry point for breeding lifecycle writes.

    Every operation runs inside one unit of work: either the record and its whole alert
    cascade are committed, or nothing is. A uniqueness conflict reported by the store is
    retried once from scratch (state re-read and re-validated) before it surfaces.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        calculator: GestationCalculator,
        *,
        max_attempts: int = 2,
    ) -> None:
        self._uow_factory = uow_factory
        self.calculator = calculator
        self.max_attempts = max_attempts

    async def _run(
        self,
        operation: str,
        work: Callable[[UnitOfWork], Awaitable[T]],
        context: dict[str, Any],
    ) -> T:
        # work may add keys (e.g. sow_id) to context once it has read them
        attempt = 1
        while True:
            try:
                async with self._uow_factory() as uow:
                    result = await work(uow)
                    await uow.commit()
                    return result
            except IntegrityFailure as exc:
                if attempt < self.max_attempts:
                    logger.warning(
                        "%s conflicted (%s); retrying: %s",
                        operation,
                        _describe(context),
                        exc.message,
                    )
                    attempt += 1
                    continue
                raise ConflictError(
                    f"Concurrent update conflict during {operation}; please retry",
                    details=dict(context, operation=operation),
                ) from exc
            except AppError:
                raise
            except Exception:
                logger.exception("%s failed (%s)", operation, _describe(context))
                raise

    async def _note_sow(
        self, uow: UnitOfWork, farm_id: UUID, record_id: UUID, context: dict[str, Any]
    ) -> None:
        record = await uow.breeding_records.get(farm_id, record_id)
        if record:
            context["sow_id"] = record.sow_id

    async def record_mating(
        self,
        farm_id: UUID,
        payload: record_mating.RecordMatingInput,
        actor_user_id: UUID | None = None,
    ) -> BreedingRecord:
        async def work(uow: UnitOfWork) -> BreedingRecord:
            out = await record_mating.execute(
                uow, farm_id, payload, self.calculator, actor_user_id=actor_user_id
            )
            return out.record

        return await self._run(
            "record_mating", work, {"farm_id": farm_id, "sow_id": payload.sow_id}
        )

    async def record_birth_outcome(
        self,
        farm_id: UUID,
        record_id: UUID,
        actual_birth_date: date | datetime | str,
        number_of_piglets: int,
        notes: str | None = None,
        actor_user_id: UUID | None = None,
    ) -> BreedingRecord:
        payload = record_birth_outcome.RecordBirthOutcomeInput(
            record_id=record_id,
            actual_birth_date=actual_birth_date,
            number_of_piglets=number_of_piglets,
            notes=notes,
        )
        context: dict[str, Any] = {"farm_id": farm_id, "record_id": record_id}

        async def work(uow: UnitOfWork) -> BreedingRecord:
            await self._note_sow(uow, farm_id, record_id, context)
            out = await record_birth_outcome.execute(
                uow, farm_id, payload, self.calculator, actor_user_id=actor_user_id
            )
            return out.record

        return await self._run("record_birth_outcome", work, context)

    async def delete_record(
        self,
        farm_id: UUID,
        record_id: UUID,
        actor_user_id: UUID | None = None,
    ) -> dict[str, UUID]:
        context: dict[str, Any] = {"farm_id": farm_id, "record_id": record_id}

        async def work(uow: UnitOfWork) -> dict[str, UUID]:
            await self._note_sow(uow, farm_id, record_id, context)
            out = await delete_breeding_record.execute(
                uow, farm_id, record_id, self.calculator.calendar, actor_user_id=actor_user_id
            )
            return {"id": out.id}

        return await self._run("delete_record", work, context)

    async def register_litter(
        self,
        farm_id: UUID,
        breeding_record_id: UUID,
        piglets: list[register_litter.PigletInput],
        actor_user_id: UUID | None = None,
    ) -> RegisterLitterResult:
        payload = register_litter.RegisterLitterInput(
            breeding_record_id=breeding_record_id, piglets=piglets
        )

        async def work(uow: UnitOfWork) -> register_litter.RegisterLitterOutput:
            return await register_litter.execute(
                uow, farm_id, payload, self.calculator, actor_user_id=actor_user_id
            )

        try:
            out = await self._run(
                "register_litter", work, {"farm_id": farm_id, "record_id": breeding_record_id}
            )
        except AppError as exc:
            logger.warning(
                "Litter batch of %d piglets for breeding record %s rejected: %s",
                len(piglets),
                breeding_record_id,
                exc.message,
            )
            return RegisterLitterResult(success=False, message=exc.message)
        return RegisterLitterResult(
            success=True,
            registered_count=len(out.piglets),
            data=out.piglets,
            warnings=out.warnings,
            message=f"{len(out.piglets)} piglets created successfully",
        )

    async def update_piglet(
        self,
        farm_id: UUID,
        piglet_id: UUID,
        changes: dict[str, Any],
        actor_user_id: UUID | None = None,
    ) -> update_piglet.PigletUpdateResult:
        async def work(uow: UnitOfWork) -> update_piglet.PigletUpdateResult:
            return await update_piglet.execute(
                uow, farm_id, piglet_id, changes, actor_user_id=actor_user_id
            )

        return await self._run(
            "update_piglet", work, {"farm_id": farm_id, "piglet_id": piglet_id}
        )

    async def get_breeding_history(self, farm_id: UUID, sow_id: str) -> list[BreedingRecord]:
        async with self._uow_factory() as uow:
            return await get_breeding_history.execute(uow, farm_id, sow_id)
