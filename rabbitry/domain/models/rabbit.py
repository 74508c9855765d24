from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Sex(str, Enum):
    FEMALE = "female"
    MALE = "male"


@dataclass(slots=True)
class Rabbit:
    id: UUID
    farm_id: UUID
    tag: str
    sex: str
    name: str | None = None
    breed: str | None = None
    hutch_id: str | None = None
    birth_date: date | None = None

    # Pregnancy bookkeeping, owned by the breeding use cases
    is_pregnant: bool = False
    pregnancy_start_date: date | None = None
    expected_birth_date: date | None = None
    last_birth_date: date | None = None
    total_litters: int = 0
    total_kits: int = 0

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        tag: str,
        sex: str,
        name: str | None = None,
        breed: str | None = None,
        hutch_id: str | None = None,
        birth_date: date | None = None,
    ) -> Rabbit:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            tag=tag,
            sex=sex,
            name=name,
            breed=breed,
            hutch_id=hutch_id,
            birth_date=birth_date,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_doe(self) -> bool:
        return self.sex == Sex.FEMALE.value

    @property
    def is_buck(self) -> bool:
        return self.sex == Sex.MALE.value

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def start_pregnancy(self, mating_date: date, expected_birth_date: date) -> None:
        self.is_pregnant = True
        self.pregnancy_start_date = mating_date
        self.expected_birth_date = expected_birth_date
        self.bump_version()

    def record_litter(self, birth_date: date, litter_size: int) -> None:
        self.is_pregnant = False
        self.pregnancy_start_date = None
        self.expected_birth_date = None
        self.last_birth_date = birth_date
        self.total_litters += 1
        self.total_kits += litter_size
        self.bump_version()

    def clear_pregnancy(self) -> None:
        self.is_pregnant = False
        self.pregnancy_start_date = None
        self.expected_birth_date = None
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
