from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Milestone:
    """One row of a milestone table.

    `day_offset` counts from the anchor date (mating date for the mating cascade, actual birth
    date for the post-birth cascade). Rows with `creates_alert=False` are markers stored on the
    breeding record only.
    """

    key: str
    label: str
    day_offset: int
    severity: str
    alert_type: str = "breeding"
    message_template: str = ""
    creates_alert: bool = True

    def render_name(self, **values: object) -> str:
        return self.label.format(**values)

    def render_message(self, **values: object) -> str:
        return self.message_template.format(**values)


@dataclass(frozen=True, slots=True)
class BreedingProfile:
    species: str
    gestation_days: int
    pregnancy_check_day: int
    weaning_days: int
    rest_days: int
    min_viable_litter: int
    max_sane_litter: int
    culling_history_depth: int
    litter_size_tolerance: int
    mating_milestones: tuple[Milestone, ...]
    post_birth_milestones: tuple[Milestone, ...]

    @property
    def remating_gap_days(self) -> int:
        return self.weaning_days + self.rest_days


def _birth_check_window(first_day: int, last_day: int) -> tuple[Milestone, ...]:
    return tuple(
        Milestone(
            key="birth_check",
            label="Check Birth for {sow_id}",
            day_offset=day,
            severity="high",
            alert_type="birth",
            message_template="Check for birth of pig {sow_id} on pen {pen} on {date}",
        )
        for day in range(first_day, last_day + 1)
    )


PIG_PROFILE = BreedingProfile(
    species="pig",
    gestation_days=114,
    pregnancy_check_day=21,
    weaning_days=42,
    rest_days=7,
    min_viable_litter=5,
    max_sane_litter=10,
    culling_history_depth=3,
    litter_size_tolerance=1,
    mating_milestones=(
        Milestone(
            key="pregnancy_confirmation",
            label="Confirm Pregnancy for {sow_id}",
            day_offset=21,
            severity="medium",
            creates_alert=False,
        ),
        Milestone(
            key="nesting_box",
            label="Add Nesting Box for {sow_id}",
            day_offset=110,
            severity="high",
            alert_type="breeding",
            message_template="Add nesting box for pig {sow_id} on pen {pen} by {date}",
        ),
        *_birth_check_window(110, 114),
    ),
    post_birth_milestones=(
        Milestone(
            key="fostering_check",
            label="Fostering Check for {sow_id}",
            day_offset=4,
            severity="medium",
            alert_type="birth",
            message_template="Check fostering needs for pig {sow_id} on pen {pen} by {date}",
        ),
        Milestone(
            key="nesting_box_removal",
            label="Remove Nesting Box for {sow_id}",
            day_offset=20,
            severity="medium",
            alert_type="birth",
            message_template="Remove nesting box for pig {sow_id} on pen {pen} by {date}",
        ),
        Milestone(
            key="weaning",
            label="Wean Piglets for {sow_id}",
            day_offset=42,
            severity="high",
            alert_type="birth",
            message_template="Wean piglets for pig {sow_id} on pen {pen} by {date}",
        ),
    ),
)

PROFILES: dict[str, BreedingProfile] = {PIG_PROFILE.species: PIG_PROFILE}


def get_profile(species: str) -> BreedingProfile:
    try:
        return PROFILES[species.lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown breeding profile '{species}'. Available: {', '.join(sorted(PROFILES))}"
        ) from exc
