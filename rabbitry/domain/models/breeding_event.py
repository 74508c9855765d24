from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

GESTATION_DAYS = 31
WEANING_DAYS = 42
POST_WEANING_REST_DAYS = 7
BUCK_REST_DAYS = 3


@dataclass(slots=True)
class BreedingEvent:
    id: UUID
    farm_id: UUID
    doe_id: UUID
    buck_id: UUID
    mating_date: date
    expected_birth_date: date

    actual_birth_date: date | None = None
    litter_size: int | None = None
    notes: str | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        doe_id: UUID,
        buck_id: UUID,
        mating_date: date,
        gestation_days: int = GESTATION_DAYS,
        notes: str | None = None,
    ) -> BreedingEvent:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            doe_id=doe_id,
            buck_id=buck_id,
            mating_date=mating_date,
            expected_birth_date=mating_date + timedelta(days=gestation_days),
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_open(self) -> bool:
        return self.actual_birth_date is None and self.deleted_at is None

    @property
    def is_completed(self) -> bool:
        return self.actual_birth_date is not None and self.deleted_at is None

    @property
    def weaning_date(self) -> date | None:
        if self.actual_birth_date is None:
            return None
        return self.actual_birth_date + timedelta(days=WEANING_DAYS)

    def record_birth(self, actual_birth_date: date, litter_size: int, notes: str | None = None) -> None:
        if not self.is_open:
            raise ValueError(f"Breeding event {self.id} is already closed")
        self.actual_birth_date = actual_birth_date
        self.litter_size = litter_size
        if notes:
            self.notes = notes
        self.bump_version()

    def retract(self) -> None:
        if not self.is_open:
            raise ValueError(f"Breeding event {self.id} is already closed")
        self.deleted_at = datetime.now(timezone.utc)
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
