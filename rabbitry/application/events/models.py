from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class MatingRecordedEvent:
    farm_id: UUID
    breeding_event_id: UUID
    doe_id: UUID
    buck_id: UUID
    mating_date: date
    expected_birth_date: date
    doe_tag: str | None = None
    buck_tag: str | None = None


@dataclass(frozen=True)
class BirthRecordedEvent:
    farm_id: UUID
    breeding_event_id: UUID
    doe_id: UUID
    actual_birth_date: date
    litter_size: int
    doe_tag: str | None = None


@dataclass(frozen=True)
class CullingRecommendedEvent:
    farm_id: UUID
    doe_id: UUID
    breeding_event_id: UUID
    reasons: tuple[str, ...]
    litter_size: int | None = None
    doe_tag: str | None = None
