from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from sowcycle.application.errors import (
    ConflictError,
    IntegrityFailure,
    NotFound,
    ValidationError,
)
from sowcycle.application.services.breeding_manager import BreedingRecordManager
from sowcycle.application.use_cases.alerts import list_alerts
from sowcycle.application.use_cases.breeding import record_mating
from sowcycle.application.use_cases.piglets import register_litter


def _mating(sow_id: str = "S1", boar_id: str = "B1") -> record_mating.RecordMatingInput:
    return record_mating.RecordMatingInput(
        sow_id=sow_id,
        boar_id=boar_id,
        mating_date="2025-01-01",
        expected_birth_date="2025-04-25",
    )


@pytest.fixture()
def manager(uow, calculator) -> BreedingRecordManager:
    return BreedingRecordManager(lambda: uow, calculator)


async def test_manager_commits_once_per_operation(uow, farm_id, user_id, manager):
    record = await manager.record_mating(farm_id, _mating(), actor_user_id=user_id)

    assert record.created_by == user_id
    assert uow.commits == 1
    assert len(uow.alerts.items) == 7


async def test_manager_retries_once_after_integrity_failure(uow, farm_id, manager):
    original_add = uow.breeding_records.add
    calls = {"n": 0}

    async def flaky_add(record):
        calls["n"] += 1
        if calls["n"] == 1:
            raise IntegrityFailure("concurrent insert")
        return await original_add(record)

    uow.breeding_records.add = flaky_add

    record = await manager.record_mating(farm_id, _mating())

    assert calls["n"] == 2
    assert record.sow_id == "S1"
    assert uow.rollbacks == 1
    assert uow.commits == 1


async def test_manager_surfaces_conflict_after_second_failure(uow, farm_id, manager):
    async def always_conflict(record):
        raise IntegrityFailure("concurrent insert")

    uow.breeding_records.add = always_conflict

    with pytest.raises(ConflictError) as exc:
        await manager.record_mating(farm_id, _mating())

    assert not isinstance(exc.value, IntegrityFailure)
    assert uow.rollbacks == 2
    assert uow.commits == 0


async def test_manager_passes_domain_errors_through(uow, farm_id, manager):
    with pytest.raises(NotFound):
        await manager.delete_record(farm_id, record_id=uuid4())
    assert uow.rollbacks == 1


async def test_manager_full_cycle(uow, farm_id, user_id, manager):
    record = await manager.record_mating(farm_id, _mating(), actor_user_id=user_id)
    resolved = await manager.record_birth_outcome(
        farm_id, record.id, "2025-04-26", 6, actor_user_id=user_id
    )
    assert resolved.actual_birth_date == date(2025, 4, 26)

    result = await manager.register_litter(
        farm_id,
        record.id,
        [register_litter.PigletInput(piglet_number=str(n)) for n in range(1, 7)],
        actor_user_id=user_id,
    )
    assert result.success
    assert result.registered_count == 6
    assert result.message == "6 piglets created successfully"

    history = await manager.get_breeding_history(farm_id, "S1")
    assert [r.id for r in history] == [record.id]


async def test_manager_register_litter_reports_rejection_softly(uow, farm_id, manager):
    record = await manager.record_mating(farm_id, _mating())

    result = await manager.register_litter(
        farm_id, record.id, [register_litter.PigletInput(piglet_number="1")]
    )

    assert result.success is False
    assert result.registered_count == 0
    assert "Birth outcome must be recorded" in result.message


async def test_list_alerts_filters_by_due_date_and_status(uow, farm_id, manager):
    await manager.record_mating(farm_id, _mating())

    due = await list_alerts.execute(uow, farm_id, due_on=date(2025, 4, 22))
    # Birth checks on the 22nd (day of) and the 23rd (day before)
    assert [a.alert_start_date.date() for a in due] == [date(2025, 4, 22), date(2025, 4, 23)]

    pending_birth = await list_alerts.execute(uow, farm_id, status="pending", alert_type="birth")
    assert len(pending_birth) == 5

    with pytest.raises(ValidationError):
        await list_alerts.execute(uow, farm_id, status="snoozed")


async def test_infrastructure_failure_is_logged_with_record_and_sow(
    uow, farm_id, manager, caplog
):
    record = await manager.record_mating(farm_id, _mating())

    async def broken_add(alert):
        raise RuntimeError("connection reset")

    uow.alerts.add = broken_add

    with caplog.at_level("ERROR", logger="sowcycle.application.services.breeding_manager"):
        with pytest.raises(RuntimeError):
            await manager.record_birth_outcome(farm_id, record.id, "2025-04-26", 6)

    messages = [r.getMessage() for r in caplog.records if r.levelname == "ERROR"]
    assert len(messages) == 1
    assert messages[0].startswith("record_birth_outcome failed")
    assert f"record_id={record.id}" in messages[0]
    assert "sow_id=S1" in messages[0]
