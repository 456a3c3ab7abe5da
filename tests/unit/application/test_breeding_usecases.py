from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from sowcycle.application.errors import InvalidDateError, NotFound, ValidationError
from sowcycle.application.notifications.types import NotificationType
from sowcycle.application.use_cases.breeding import (
    delete_breeding_record,
    get_breeding_history,
    get_breeding_record,
    list_breeding_records,
)
from sowcycle.domain.models.alert import AlertStatus
from sowcycle.domain.models.breeding_record import BreedingState
from sowcycle.domain.models.pig_birth_history import PigBirthHistory


def _midnight(y: int, m: int, d: int) -> datetime:
    return datetime(y, m, d, tzinfo=timezone.utc)


async def test_record_mating_creates_record_and_seven_alerts(uow, mate):
    record = await mate()

    assert record.alert_date == date(2025, 1, 22)
    assert record.expected_birth_date == date(2025, 4, 25)
    assert record.state is BreedingState.MATED

    alerts = uow.alerts.for_pig("S1")
    assert len(alerts) == 7
    assert all(a.status == AlertStatus.PENDING.value for a in alerts)

    confirmation = alerts[0]
    assert confirmation.name == "Breeding Success for S1 and B1"
    assert confirmation.alert_type == "breeding"
    assert confirmation.notify_on == [_midnight(2025, 1, 1)]

    nesting = alerts[1]
    assert nesting.name == "Add Nesting Box for S1"
    assert nesting.severity == "high"
    assert nesting.alert_start_date == _midnight(2025, 4, 21)
    assert nesting.notify_on == [_midnight(2025, 4, 20), _midnight(2025, 4, 21)]
    assert "Pen A" in nesting.message
    assert "April 21, 2025" in nesting.message

    birth_checks = alerts[2:]
    assert [a.alert_start_date.date() for a in birth_checks] == [
        date(2025, 4, 21),
        date(2025, 4, 22),
        date(2025, 4, 23),
        date(2025, 4, 24),
        date(2025, 4, 25),
    ]
    assert {a.alert_type for a in birth_checks} == {"birth"}


async def test_record_mating_marks_sow_pregnant_and_locks_it(uow, mate):
    await mate()

    sow = uow.pigs.items["S1"]
    assert sow.is_pregnant
    assert sow.pregnancy_start_date == date(2025, 1, 1)
    assert sow.expected_birth_date == date(2025, 4, 25)
    assert uow.pigs.locked == ["S1"]


async def test_record_mating_honours_notify_override_and_message(uow, mate):
    await mate(immediate_notify_date="2025-01-03", alert_message="Custom note")

    confirmation = uow.alerts.for_pig("S1")[0]
    assert confirmation.notify_on == [_midnight(2025, 1, 3)]
    assert confirmation.message == "Custom note"


async def test_record_mating_without_pen_uses_unknown_label(uow, mate):
    uow.pigs.items["S1"].pen_id = uuid4()

    await mate()

    nesting = uow.alerts.for_pig("S1")[1]
    assert nesting.pen_id is None
    assert "pen unknown" in nesting.message


@pytest.mark.parametrize(
    ("sow_id", "boar_id"),
    [("S9", "B1"), ("B1", "B2"), ("S1", "B9"), ("S1", "S2")],
)
async def test_record_mating_rejects_unknown_or_wrong_gender_pigs(uow, mate, sow_id, boar_id):
    with pytest.raises(ValidationError):
        await mate(sow_id=sow_id, boar_id=boar_id)
    assert uow.breeding_records.items == {}
    assert uow.alerts.items == []


async def test_record_mating_rejects_second_open_record(uow, mate):
    await mate()
    with pytest.raises(ValidationError):
        await mate(mating_date="2025-01-05")
    assert len(uow.alerts.for_pig("S1")) == 7


async def test_record_mating_rejects_bad_dates(mate):
    with pytest.raises(InvalidDateError):
        await mate(mating_date="01/13/2025", expected_birth_date="2025-04-25")
    with pytest.raises(ValidationError):
        await mate(expected_birth_date="2024-12-31")


async def test_remating_inside_rest_window_is_rejected(uow, mate, farrow):
    first = await mate()
    await farrow(first.id, actual_birth_date="2025-04-26")

    # Birth 2025-04-26 + 48 days
    with pytest.raises(ValidationError) as exc:
        await mate(mating_date="2025-06-13")
    assert "re-mated too soon" in exc.value.message


@pytest.mark.parametrize("mating_date", ["2025-06-14", "2025-06-15"])
async def test_remating_from_day_49_is_allowed(uow, mate, farrow, mating_date):
    first = await mate()
    await farrow(first.id, actual_birth_date="2025-04-26")

    second = await mate(mating_date=mating_date)
    assert second.is_open


async def test_birth_outcome_completes_only_this_sows_pending_alerts(uow, mate, farrow):
    s1 = await mate()
    await mate(sow_id="S2", boar_id="B2")

    out = await farrow(s1.id, actual_birth_date="2025-04-26", number_of_piglets=6)

    assert out.completed_alerts == 7
    s1_alerts = uow.alerts.for_pig("S1")
    completed = [a for a in s1_alerts if a.status == AlertStatus.COMPLETED.value]
    pending = [a for a in s1_alerts if a.status == AlertStatus.PENDING.value]
    assert len(completed) == 7
    assert [a.alert_start_date for a in pending] == [
        _midnight(2025, 4, 30),
        _midnight(2025, 5, 16),
        _midnight(2025, 6, 7),
    ]
    assert [a.name for a in pending] == [
        "Fostering Check for S1",
        "Remove Nesting Box for S1",
        "Wean Piglets for S1",
    ]
    assert all(a.status == AlertStatus.PENDING.value for a in uow.alerts.for_pig("S2"))


async def test_birth_outcome_resolves_record_and_clears_pregnancy(uow, mate, farrow):
    record = await mate()

    out = await farrow(record.id, notes="Easy farrowing")

    assert out.record.state is BreedingState.RESOLVED
    assert out.record.actual_birth_date == date(2025, 4, 26)
    assert out.record.number_of_piglets == 6
    assert out.record.notes == "Easy farrowing"
    sow = uow.pigs.items["S1"]
    assert not sow.is_pregnant
    assert sow.actual_birth_date == date(2025, 4, 26)
    history = await uow.birth_histories.get_for_record(record.id)
    assert history.number_of_piglets == 6
    assert not out.culling.triggered
    assert uow.notifications.items == []


async def test_birth_outcome_rejects_invalid_input(uow, mate, farrow):
    record = await mate()
    with pytest.raises(NotFound):
        await farrow(uuid4())
    with pytest.raises(ValidationError):
        await farrow(record.id, actual_birth_date="2024-12-30")
    with pytest.raises(ValidationError):
        await farrow(record.id, number_of_piglets=-1)

    await farrow(record.id)
    with pytest.raises(ValidationError):
        await farrow(record.id)


async def test_birth_outcome_notifies_once_per_culling_rule(uow, farm_id, user_id, mate, farrow):
    for year, size in ((2022, 4), (2023, 3), (2024, 4)):
        uow.birth_histories.items.append(
            PigBirthHistory.create(
                farm_id=farm_id,
                sow_id="S1",
                breeding_record_id=uuid4(),
                birth_date=date(year, 4, 1),
                number_of_piglets=size,
            )
        )
    record = await mate()

    out = await farrow(record.id, number_of_piglets=4)

    assert len(out.notification_ids) == 2
    notes = uow.notifications.items
    assert {n.type for n in notes} == {NotificationType.CULLING_ALERT}
    assert {n.priority for n in notes} == {"high"}
    assert {n.user_id for n in notes} == {user_id}
    assert {n.data["reason"] for n in notes} == {"chronic_low_yield", "out_of_range_litter"}
    assert notes[0].data["litter_history"] == [4, 3, 4]


async def test_culling_without_actor_skips_notification(uow, mate, farrow):
    record = await mate()

    out = await farrow(record.id, number_of_piglets=12, actor_user_id=None)

    assert out.culling.triggered
    assert uow.notifications.items == []


async def test_delete_rejects_pending_alerts_and_is_not_repeatable(
    uow, farm_id, calendar, user_id, mate
):
    record = await mate()

    out = await delete_breeding_record.execute(
        uow, farm_id, record.id, calendar, actor_user_id=user_id
    )

    assert out.id == record.id
    assert out.alerts_rejected == 7
    statuses = {a.status for a in uow.alerts.for_pig("S1")}
    assert statuses == {AlertStatus.REJECTED.value}
    assert not uow.pigs.items["S1"].is_pregnant
    assert uow.breeding_records.items[record.id].deleted_at is not None

    with pytest.raises(NotFound):
        await delete_breeding_record.execute(uow, farm_id, record.id, calendar)
    assert {a.status for a in uow.alerts.for_pig("S1")} == {AlertStatus.REJECTED.value}


async def test_delete_of_resolved_record_is_rejected(uow, farm_id, calendar, mate, farrow):
    record = await mate()
    await farrow(record.id)

    with pytest.raises(ValidationError):
        await delete_breeding_record.execute(uow, farm_id, record.id, calendar)


async def test_deleted_record_frees_the_sow_for_a_new_mating(uow, farm_id, calendar, mate):
    record = await mate()
    await delete_breeding_record.execute(uow, farm_id, record.id, calendar)

    again = await mate(mating_date="2025-01-10")
    assert again.id != record.id


async def test_breeding_history_lists_sow_records_newest_first(uow, farm_id, mate, farrow):
    first = await mate()
    await farrow(first.id)
    second = await mate(mating_date="2025-07-01")

    history = await get_breeding_history.execute(uow, farm_id, "S1")
    assert [r.id for r in history] == [second.id, first.id]

    with pytest.raises(NotFound):
        await get_breeding_history.execute(uow, farm_id, "S404")


async def test_get_breeding_record_includes_piglets(uow, farm_id, mate):
    record = await mate()

    detail = await get_breeding_record.execute(uow, farm_id, record.id)
    assert detail.record.id == record.id
    assert detail.piglets == []

    with pytest.raises(NotFound):
        await get_breeding_record.execute(uow, farm_id, uuid4())


async def test_list_breeding_records_flags_overdue_open_records(
    uow, farm_id, calculator, mate, farrow
):
    resolved = await mate()
    await farrow(resolved.id)
    await mate(sow_id="S2", boar_id="B2", mating_date="2025-01-02")

    result = await list_breeding_records.execute(
        uow,
        farm_id,
        calculator,
        grace_days=3,
        now=datetime(2025, 5, 1, tzinfo=timezone.utc),
    )

    assert result.total == 2
    by_sow = {item.record.sow_id: item for item in result.items}
    assert by_sow["S2"].state == "mated"
    assert by_sow["S2"].is_overdue
    assert by_sow["S1"].state == "resolved"
    assert not by_sow["S1"].is_overdue

    with pytest.raises(ValidationError):
        await list_breeding_records.execute(uow, farm_id, calculator, limit=0)
