from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sowcycle.domain.value_objects.breeding_profile import BreedingProfile


class CullingReason(str, Enum):
    CHRONIC_LOW_YIELD = "chronic_low_yield"
    OUT_OF_RANGE_LITTER = "out_of_range_litter"


@dataclass(frozen=True, slots=True)
class CullingFlag:
    reason: CullingReason
    message: str


@dataclass(frozen=True, slots=True)
class CullingDecision:
    sow_id: str
    litter_history: tuple[int, ...]
    current_litter: int
    flags: tuple[CullingFlag, ...] = field(default_factory=tuple)

    @property
    def triggered(self) -> bool:
        return bool(self.flags)

    def has(self, reason: CullingReason) -> bool:
        return any(f.reason is reason for f in self.flags)


def recent_litters(sizes: list[int | None], depth: int) -> list[int]:
    """Non-zero litter sizes, most recent first, capped at `depth`.

    `sizes` must already be ordered newest first.
    """
    return [n for n in (s or 0 for s in sizes) if n > 0][:depth]


def evaluate(
    profile: BreedingProfile,
    sow_id: str,
    litter_history: list[int],
    current_litter: int,
) -> CullingDecision:
    """Apply both culling rules independently; either, both or neither may fire."""
    history = recent_litters(litter_history, profile.culling_history_depth)
    minimum = profile.min_viable_litter
    maximum = profile.max_sane_litter
    flags: list[CullingFlag] = []

    if len(history) >= profile.culling_history_depth and all(n < minimum for n in history):
        flags.append(
            CullingFlag(
                CullingReason.CHRONIC_LOW_YIELD,
                f"Sow {sow_id} recommended for culling due to low litter size (<{minimum}) "
                f"over {profile.culling_history_depth} generations.",
            )
        )

    if current_litter < minimum or current_litter > maximum:
        flags.append(
            CullingFlag(
                CullingReason.OUT_OF_RANGE_LITTER,
                f"Sow {sow_id} recommended for culling due to litter size {current_litter}.",
            )
        )

    return CullingDecision(
        sow_id=sow_id,
        litter_history=tuple(history),
        current_litter=current_litter,
        flags=tuple(flags),
    )
