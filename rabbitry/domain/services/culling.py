from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

HISTORY_WINDOW = 3
MIN_LITTER_SIZE = 5
MAX_LITTER_SIZE = 10


class CullingReason(str, Enum):
    CHRONIC_SMALL_LITTERS = "chronic_small_litters"
    OUT_OF_RANGE_LITTER_SIZE = "out_of_range_litter_size"


@dataclass(frozen=True, slots=True)
class CullingDecision:
    reasons: tuple[CullingReason, ...] = field(default_factory=tuple)

    @property
    def recommend(self) -> bool:
        return bool(self.reasons)


def evaluate(
    recent_litters: Sequence[int],
    current_litter_size: int | None = None,
) -> CullingDecision:
    """Decide whether a doe should leave the breeding pool.

    `recent_litters` holds litter sizes of completed births, most recent
    first; only the first three are considered. Both rules are checked and
    every reason that applies is reported.
    """
    reasons: list[CullingReason] = []
    window = list(recent_litters[:HISTORY_WINDOW])
    if len(window) == HISTORY_WINDOW and all(size < MIN_LITTER_SIZE for size in window):
        reasons.append(CullingReason.CHRONIC_SMALL_LITTERS)
    if current_litter_size is not None and (
        current_litter_size < MIN_LITTER_SIZE or current_litter_size > MAX_LITTER_SIZE
    ):
        reasons.append(CullingReason.OUT_OF_RANGE_LITTER_SIZE)
    return CullingDecision(reasons=tuple(reasons))
