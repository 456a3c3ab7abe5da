from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from sowcycle.domain.value_objects.breeding_profile import BreedingProfile, Milestone
from sowcycle.utils.datetime_tz import FarmCalendar


@dataclass(frozen=True, slots=True)
class MilestoneOffset:
    label: str
    day_offset: int
    severity: str


class GestationCalculator:
    """Gestation milestones derived from a mating date. No I/O, UTC calendar days only."""

    def __init__(self, profile: BreedingProfile, calendar: FarmCalendar) -> None:
        self.profile = profile
        self.calendar = calendar

    def expected_birth_date(self, mating_date: date | datetime | str) -> date:
        mated = self.calendar.parse_date(mating_date, "mating_date")
        return self.calendar.add_days(mated, self.profile.gestation_days)

    def pregnancy_check_date(self, mating_date: date | datetime | str) -> date:
        mated = self.calendar.parse_date(mating_date, "mating_date")
        return self.calendar.add_days(mated, self.profile.pregnancy_check_day)

    def milestone_offsets(self) -> list[MilestoneOffset]:
        return [
            MilestoneOffset(m.key, m.day_offset, m.severity)
            for m in self.profile.mating_milestones
        ]

    def alert_milestones(self) -> list[Milestone]:
        return [m for m in self.profile.mating_milestones if m.creates_alert]

    def milestone_date(self, anchor: date, milestone: Milestone) -> date:
        return self.calendar.add_days(anchor, milestone.day_offset)

    def weaning_date(self, actual_birth_date: date | datetime | str) -> date:
        born = self.calendar.parse_date(actual_birth_date, "actual_birth_date")
        return self.calendar.add_days(born, self.profile.weaning_days)

    def earliest_remating_date(self, actual_birth_date: date | datetime | str) -> date:
        """Weaning plus the rest period; mating on this day is allowed."""
        born = self.calendar.parse_date(actual_birth_date, "actual_birth_date")
        return self.calendar.add_days(born, self.profile.remating_gap_days)

    def is_overdue(
        self,
        mating_date: date | datetime | str,
        grace_days: int = 0,
        now: datetime | None = None,
    ) -> bool:
        deadline = self.calendar.add_days(self.expected_birth_date(mating_date), grace_days)
        today = self.calendar.parse_date(now, "now") if now else self.calendar.today()
        return today > deadline
