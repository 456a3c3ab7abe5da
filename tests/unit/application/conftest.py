from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from sowcycle.domain.models.alert import Alert, AlertStatus
from sowcycle.domain.models.breeding_record import BreedingRecord
from sowcycle.domain.models.notification import Notification
from sowcycle.domain.models.pen import Pen
from sowcycle.domain.models.pig import Gender, Pig
from sowcycle.domain.models.pig_birth_history import PigBirthHistory
from sowcycle.domain.models.piglet_record import PigletRecord
from sowcycle.domain.services.gestation import GestationCalculator
from sowcycle.domain.value_objects.breeding_profile import PIG_PROFILE
from sowcycle.utils.datetime_tz import FarmCalendar


class InMemoryPigs:
    def __init__(self) -> None:
        self.items: dict[str, Pig] = {}
        self.locked: list[str] = []

    async def add(self, pig: Pig) -> Pig:
        self.items[pig.pig_id] = pig
        return pig

    async def get(self, farm_id, pig_id, *, gender=None, for_update=False):
        pig = self.items.get(pig_id)
        if pig is None or pig.farm_id != farm_id or pig.deleted_at is not None:
            return None
        if gender and pig.gender != gender:
            return None
        if for_update:
            self.locked.append(pig_id)
        return pig

    async def list_by_ids(self, farm_id, pig_ids):
        return [p for p in self.items.values() if p.farm_id == farm_id and p.pig_id in pig_ids]

    async def update_reproductive_state(self, pig: Pig) -> Pig:
        self.items[pig.pig_id] = pig
        return pig


class InMemoryPens:
    def __init__(self) -> None:
        self.items: dict[UUID, Pen] = {}

    async def add(self, pen: Pen) -> Pen:
        self.items[pen.id] = pen
        return pen

    async def get(self, farm_id, pen_id):
        pen = self.items.get(pen_id)
        return pen if pen and pen.farm_id == farm_id else None


class InMemoryBreedingRecords:
    def __init__(self) -> None:
        self.items: dict[UUID, BreedingRecord] = {}

    def _live(self, farm_id):
        return [r for r in self.items.values() if r.farm_id == farm_id and r.deleted_at is None]

    async def add(self, record: BreedingRecord) -> BreedingRecord:
        self.items[record.id] = record
        return record

    async def update(self, record: BreedingRecord) -> BreedingRecord:
        self.items[record.id] = record
        return record

    async def get(self, farm_id, record_id):
        return next((r for r in self._live(farm_id) if r.id == record_id), None)

    async def get_open_for_sow(self, farm_id, sow_id):
        return next((r for r in self._live(farm_id) if r.sow_id == sow_id and r.is_open), None)

    async def get_latest_resolved_for_sow(self, farm_id, sow_id):
        resolved = [r for r in self._live(farm_id) if r.sow_id == sow_id and not r.is_open]
        return max(resolved, key=lambda r: r.actual_birth_date, default=None)

    async def list_for_sow(self, farm_id, sow_id):
        records = [r for r in self._live(farm_id) if r.sow_id == sow_id]
        return sorted(records, key=lambda r: r.mating_date, reverse=True)

    async def list(self, farm_id, *, limit=None, offset=0):
        records = sorted(self._live(farm_id), key=lambda r: r.mating_date, reverse=True)
        end = None if limit is None else offset + limit
        return records[offset:end]

    async def count(self, farm_id):
        return len(self._live(farm_id))

    async def delete(self, record: BreedingRecord) -> None:
        self.items[record.id] = record


class InMemoryAlerts:
    def __init__(self) -> None:
        self.items: list[Alert] = []

    async def add(self, alert: Alert) -> Alert:
        self.items.append(alert)
        return alert

    async def transition_pending(self, farm_id, pig_id, alert_types, target_status):
        types = set(alert_types)
        changed = 0
        for alert in self.items:
            if (
                alert.farm_id == farm_id
                and alert.pig_id == pig_id
                and alert.alert_type in types
                and alert.status == AlertStatus.PENDING.value
            ):
                alert.status = target_status
                changed += 1
        return changed

    async def list(self, farm_id, *, status=None, alert_type=None, pig_id=None, due_on=None):
        alerts = [a for a in self.items if a.farm_id == farm_id]
        if status:
            alerts = [a for a in alerts if a.status == status]
        if alert_type:
            alerts = [a for a in alerts if a.alert_type == alert_type]
        if pig_id:
            alerts = [a for a in alerts if a.pig_id == pig_id]
        if due_on:
            alerts = [a for a in alerts if any(d.date() == due_on for d in a.notify_on)]
        return alerts

    def for_pig(self, pig_id: str) -> list[Alert]:
        return [a for a in self.items if a.pig_id == pig_id]


class InMemoryPiglets:
    def __init__(self) -> None:
        self.items: dict[UUID, PigletRecord] = {}

    def _live(self):
        return [p for p in self.items.values() if p.deleted_at is None]

    async def add_many(self, piglets):
        for piglet in piglets:
            self.items[piglet.id] = piglet
        return list(piglets)

    async def get(self, farm_id, piglet_id):
        return next((p for p in self._live() if p.id == piglet_id and p.farm_id == farm_id), None)

    async def update(self, piglet):
        self.items[piglet.id] = piglet
        return piglet

    async def count_for_record(self, breeding_record_id):
        return len(await self.list_for_record(breeding_record_id))

    async def list_for_record(self, breeding_record_id):
        return [p for p in self._live() if p.breeding_record_id == breeding_record_id]

    async def find_existing_numbers(self, farm_id, numbers):
        return [
            p.piglet_number
            for p in self._live()
            if p.farm_id == farm_id and p.piglet_number in numbers
        ]

    async def soft_delete_for_record(self, breeding_record_id):
        removed = await self.list_for_record(breeding_record_id)
        for piglet in removed:
            piglet.deleted_at = datetime.now(timezone.utc)
        return len(removed)


class InMemoryBirthHistories:
    def __init__(self) -> None:
        self.items: list[PigBirthHistory] = []

    async def add(self, history):
        self.items.append(history)
        return history

    async def get_for_record(self, breeding_record_id):
        return next((h for h in self.items if h.breeding_record_id == breeding_record_id), None)

    async def recent_litter_sizes(self, farm_id, sow_id, limit):
        rows = [h for h in self.items if h.farm_id == farm_id and h.sow_id == sow_id]
        rows.sort(key=lambda h: h.birth_date, reverse=True)
        return [h.number_of_piglets for h in rows[:limit]]


class InMemoryNotifications:
    def __init__(self) -> None:
        self.items: list[Notification] = []

    async def add(self, notification):
        self.items.append(notification)
        return notification


class InMemoryUnitOfWork:
    def __init__(self) -> None:
        self.pigs = InMemoryPigs()
        self.pens = InMemoryPens()
        self.breeding_records = InMemoryBreedingRecords()
        self.alerts = InMemoryAlerts()
        self.piglets = InMemoryPiglets()
        self.birth_histories = InMemoryBirthHistories()
        self.notifications = InMemoryNotifications()
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def user_id() -> UUID:
    return uuid4()


@pytest.fixture()
def calendar() -> FarmCalendar:
    return FarmCalendar(clock=lambda: datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture()
def calculator(calendar: FarmCalendar) -> GestationCalculator:
    return GestationCalculator(PIG_PROFILE, calendar)


@pytest.fixture()
def uow(farm_id: UUID) -> InMemoryUnitOfWork:
    """Unit of work seeded with pen 'Pen A', sows S1/S2 and boars B1/B2."""
    unit = InMemoryUnitOfWork()
    pen = Pen(id=uuid4(), farm_id=farm_id, name="Pen A")
    unit.pens.items[pen.id] = pen
    for tag, gender in (
        ("S1", Gender.FEMALE),
        ("S2", Gender.FEMALE),
        ("B1", Gender.MALE),
        ("B2", Gender.MALE),
    ):
        pig = Pig.create(farm_id=farm_id, pig_id=tag, gender=gender.value, pen_id=pen.id)
        unit.pigs.items[tag] = pig
    return unit


@pytest.fixture()
def mate(uow, farm_id, calculator, user_id):
    """Record a mating for a sow, returning the record."""
    from sowcycle.application.use_cases.breeding import record_mating

    async def _mate(sow_id="S1", boar_id="B1", mating_date="2025-01-01", **extra):
        payload = record_mating.RecordMatingInput(
            sow_id=sow_id,
            boar_id=boar_id,
            mating_date=mating_date,
            expected_birth_date=extra.pop("expected_birth_date", None)
            or calculator.expected_birth_date(mating_date),
            **extra,
        )
        out = await record_mating.execute(
            uow, farm_id, payload, calculator, actor_user_id=user_id
        )
        return out.record

    return _mate


@pytest.fixture()
def farrow(uow, farm_id, calculator, user_id):
    """Record the birth outcome of a breeding record."""
    from sowcycle.application.use_cases.breeding import record_birth_outcome

    async def _farrow(record_id, actual_birth_date="2025-04-26", number_of_piglets=6, **extra):
        payload = record_birth_outcome.RecordBirthOutcomeInput(
            record_id=record_id,
            actual_birth_date=actual_birth_date,
            number_of_piglets=number_of_piglets,
            notes=extra.pop("notes", None),
        )
        return await record_birth_outcome.execute(
            uow, farm_id, payload, calculator, actor_user_id=extra.pop("actor_user_id", user_id)
        )

    return _farrow
