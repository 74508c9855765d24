from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable
from uuid import UUID

from rabbitry.domain.models.breeding_event import (
    BUCK_REST_DAYS,
    POST_WEANING_REST_DAYS,
    WEANING_DAYS,
    BreedingEvent,
)
from rabbitry.domain.models.rabbit import Rabbit


class MatingRejection(str, Enum):
    DOE_INVALID = "doe_invalid"
    BUCK_INVALID = "buck_invalid"
    BUCK_RESTING = "buck_resting"
    DOE_RESTING = "doe_resting"


@dataclass(frozen=True, slots=True)
class MatingCheck:
    reason: MatingRejection | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def accepted(cls) -> MatingCheck:
        return cls()

    @classmethod
    def rejected(cls, reason: MatingRejection, message: str) -> MatingCheck:
        return cls(reason=reason, message=message)


def earliest_mating_after_birth(birth_date: date) -> date:
    """First day a doe may be served again after kindling on `birth_date`."""
    return birth_date + timedelta(days=WEANING_DAYS + POST_WEANING_REST_DAYS)


def validate_mating(
    farm_id: UUID,
    doe: Rabbit | None,
    buck: Rabbit | None,
    mating_date: date,
    *,
    buck_matings: Iterable[BreedingEvent] = (),
    doe_last_birth: BreedingEvent | None = None,
) -> MatingCheck:
    """Check a proposed mating against the fixed breeding rules.

    Rules run in order and the first failure is returned:

    1. the doe exists, is female, active and belongs to `farm_id`;
    2. the buck exists, is male, active and belongs to `farm_id`;
    3. the buck has not served less than three days before or after
       `mating_date` (three full days apart is allowed);
    4. the doe has finished weaning her last litter (birth + 42 days) and
       rested one more week.

    `buck_matings` and `doe_last_birth` are the histories loaded by the
    caller; deleted events are ignored.
    """
    if doe is None or not doe.is_doe or not doe.is_active or doe.farm_id != farm_id:
        return MatingCheck.rejected(MatingRejection.DOE_INVALID, "Doe not found or invalid")
    if buck is None or not buck.is_buck or not buck.is_active or buck.farm_id != farm_id:
        return MatingCheck.rejected(MatingRejection.BUCK_INVALID, "Buck not found or invalid")

    rest = timedelta(days=BUCK_REST_DAYS)
    for previous in buck_matings:
        if previous.deleted_at is not None or previous.buck_id != buck.id:
            continue
        if abs(mating_date - previous.mating_date) < rest:
            return MatingCheck.rejected(
                MatingRejection.BUCK_RESTING,
                f"Buck {buck.tag} has served within the last {BUCK_REST_DAYS} days",
            )

    if (
        doe_last_birth is not None
        and doe_last_birth.deleted_at is None
        and doe_last_birth.actual_birth_date is not None
    ):
        earliest = earliest_mating_after_birth(doe_last_birth.actual_birth_date)
        if mating_date < earliest:
            return MatingCheck.rejected(
                MatingRejection.DOE_RESTING,
                f"Doe {doe.tag} cannot be served within 1 week of weaning "
                f"(earliest {earliest.isoformat()})",
            )

    return MatingCheck.accepted()
