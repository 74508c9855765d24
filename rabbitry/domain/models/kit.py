from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(slots=True)
class Kit:
    id: UUID
    farm_id: UUID
    breeding_event_id: UUID
    kit_number: str
    sex: str | None = None
    color: str | None = None
    birth_weight: Decimal | None = None
    status: str = "alive"
    weaning_date: date | None = None
    notes: str | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        breeding_event_id: UUID,
        kit_number: str,
        sex: str | None = None,
        color: str | None = None,
        birth_weight: Decimal | None = None,
        weaning_date: date | None = None,
        notes: str | None = None,
    ) -> Kit:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            breeding_event_id=breeding_event_id,
            kit_number=kit_number,
            sex=sex,
            color=color,
            birth_weight=birth_weight,
            weaning_date=weaning_date,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
