from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from sowcycle.application.errors import NotFound, ValidationError
from sowcycle.application.use_cases.piglets import register_litter, update_piglet


@pytest.fixture()
async def farrowed(mate, farrow):
    record = await mate()
    out = await farrow(record.id, actual_birth_date="2025-04-26", number_of_piglets=6)
    return out.record


def _batch(*numbers: str, **fields) -> list[register_litter.PigletInput]:
    return [register_litter.PigletInput(piglet_number=n, **fields) for n in numbers]


async def _register(uow, farm_id, calculator, record_id, piglets):
    payload = register_litter.RegisterLitterInput(breeding_record_id=record_id, piglets=piglets)
    return await register_litter.execute(uow, farm_id, payload, calculator)


async def test_register_litter_creates_piglets_and_relocation_alert(
    uow, farm_id, calculator, farrowed
):
    out = await _register(
        uow, farm_id, calculator, farrowed.id, _batch("1", "2", "3", "4", "5", "6")
    )

    assert [p.piglet_number for p in out.piglets] == ["1", "2", "3", "4", "5", "6"]
    assert {p.weaning_date for p in out.piglets} == {date(2025, 6, 7)}
    assert {p.parent_female_id for p in out.piglets} == {"S1"}
    assert {p.parent_male_id for p in out.piglets} == {"B1"}
    assert {p.status for p in out.piglets} == {"alive"}
    assert out.birth_history.breeding_record_id == farrowed.id
    assert out.warnings == []

    relocate = [a for a in uow.alerts.items if a.id == out.relocation_alert_id]
    assert len(relocate) == 1
    assert relocate[0].name == "Relocate Piglets for S1"
    assert relocate[0].alert_start_date == datetime(2025, 6, 7, tzinfo=timezone.utc)
    assert "June 7, 2025" in relocate[0].message


async def test_register_litter_allows_one_over_litter_size_then_rejects(
    uow, farm_id, calculator, farrowed
):
    await _register(uow, farm_id, calculator, farrowed.id, _batch("1", "2", "3", "4", "5", "6"))

    seventh = await _register(uow, farm_id, calculator, farrowed.id, _batch("7"))
    assert len(seventh.piglets) == 1
    assert seventh.relocation_alert_id is None

    with pytest.raises(ValidationError) as exc:
        await _register(uow, farm_id, calculator, farrowed.id, _batch("8"))
    assert "exceed" in exc.value.message
    assert await uow.piglets.count_for_record(farrowed.id) == 7


async def test_register_litter_rejects_number_already_used_on_farm(
    uow, farm_id, calculator, farrowed, mate, farrow
):
    await _register(uow, farm_id, calculator, farrowed.id, _batch("3"))
    other = await mate(sow_id="S2", boar_id="B2")
    await farrow(other.id, number_of_piglets=8)

    with pytest.raises(ValidationError) as exc:
        await _register(uow, farm_id, calculator, other.id, _batch("3", "9"))
    assert exc.value.message == "Duplicate piglet numbers: 3"
    assert await uow.piglets.count_for_record(other.id) == 0


async def test_register_litter_rejects_duplicates_inside_batch(
    uow, farm_id, calculator, farrowed
):
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, farrowed.id, _batch("1", "2", "1"))


async def test_register_litter_requires_recorded_birth(uow, farm_id, calculator, mate):
    record = await mate()
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, record.id, _batch("1"))
    with pytest.raises(NotFound):
        await _register(uow, farm_id, calculator, uuid4(), _batch("1"))


async def test_register_litter_validates_entries(uow, farm_id, calculator, farrowed):
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, farrowed.id, [])
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, farrowed.id, _batch("  "))
    with pytest.raises(ValidationError):
        await _register(
            uow, farm_id, calculator, farrowed.id, _batch("1", birth_weight=Decimal("0"))
        )
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, farrowed.id, _batch("1", gender="other"))
    with pytest.raises(ValidationError):
        await _register(
            uow, farm_id, calculator, farrowed.id, _batch("1", breeding_record_id=uuid4())
        )


@pytest.mark.parametrize(
    "fields",
    [
        {"parent_female_id": "S2"},
        {"parent_female_id": "B1"},
        {"parent_male_id": "S2"},
        {"parent_male_id": "X-404"},
    ],
)
async def test_register_litter_rejects_bad_parents(uow, farm_id, calculator, farrowed, fields):
    with pytest.raises(ValidationError):
        await _register(uow, farm_id, calculator, farrowed.id, _batch("1", **fields))


async def test_register_litter_warns_when_male_parent_differs(
    uow, farm_id, calculator, farrowed
):
    out = await _register(
        uow, farm_id, calculator, farrowed.id, _batch("1", parent_male_id="B2")
    )

    assert out.piglets[0].parent_male_id == "B2"
    assert out.warnings == ["Piglet 1: male parent B2 differs from breeding record boar B1"]


async def test_update_piglet_sets_weaning_weight_and_status(uow, farm_id, calculator, farrowed):
    out = await _register(uow, farm_id, calculator, farrowed.id, _batch("1"))
    piglet_id = out.piglets[0].id

    result = await update_piglet.execute(
        uow, farm_id, piglet_id, {"weaning_weight": "7.25", "status": "weaned", "notes": "ok"}
    )

    assert result.piglet.weaning_weight == Decimal("7.25")
    assert result.piglet.status == "weaned"
    assert result.piglet.notes == "ok"
    assert result.warnings == []


async def test_update_piglet_reports_unknown_parents_as_warnings(
    uow, farm_id, calculator, farrowed
):
    out = await _register(uow, farm_id, calculator, farrowed.id, _batch("1"))

    result = await update_piglet.execute(
        uow, farm_id, out.piglets[0].id, {"parent_male_id": "B-OLD", "parent_female_id": "S-OLD"}
    )

    assert result.piglet.parent_male_id == "B-OLD"
    assert result.warnings == [
        "Parent male pig B-OLD not found",
        "Parent female pig S-OLD not found",
    ]


async def test_update_piglet_rejects_invalid_changes(uow, farm_id, calculator, farrowed):
    out = await _register(uow, farm_id, calculator, farrowed.id, _batch("1"))
    piglet_id = out.piglets[0].id

    with pytest.raises(ValidationError):
        await update_piglet.execute(uow, farm_id, piglet_id, {"weaning_weight": -1})
    with pytest.raises(ValidationError):
        await update_piglet.execute(uow, farm_id, piglet_id, {"parent_female_id": "B1"})
    with pytest.raises(ValidationError):
        await update_piglet.execute(uow, farm_id, piglet_id, {"piglet_number": "99"})
    with pytest.raises(NotFound):
        await update_piglet.execute(uow, farm_id, uuid4(), {"status": "dead"})


async def test_register_litter_ties_every_entry_to_the_record(
    uow, farm_id, calculator, farrowed
):
    mixed = [
        register_litter.PigletInput(piglet_number="1", breeding_record_id=farrowed.id),
        register_litter.PigletInput(piglet_number="2"),
    ]
    out = await _register(uow, farm_id, calculator, farrowed.id, mixed)
    assert {p.breeding_record_id for p in out.piglets} == {farrowed.id}

    mismatched = [
        register_litter.PigletInput(piglet_number="3"),
        register_litter.PigletInput(piglet_number="4", breeding_record_id=uuid4()),
    ]
    with pytest.raises(ValidationError) as exc:
        await _register(uow, farm_id, calculator, farrowed.id, mismatched)
    assert "Piglet 4 references breeding record" in exc.value.message
    assert await uow.piglets.count_for_record(farrowed.id) == 2
