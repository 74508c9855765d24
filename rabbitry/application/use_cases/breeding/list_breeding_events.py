from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.breeding_event import BreedingEvent


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    doe_id: UUID | None = None,
    open_only: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> list[BreedingEvent]:
    if limit <= 0 or limit > 200:
        raise ValidationError("limit must be between 1 and 200")
    if offset < 0:
        raise ValidationError("offset must be zero or positive")
    return await uow.breeding_events.list(
        farm_id, doe_id=doe_id, open_only=open_only, limit=limit, offset=offset
    )
