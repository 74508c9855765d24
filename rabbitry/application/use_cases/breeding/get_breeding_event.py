from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.kit import Kit


@dataclass(slots=True)
class BreedingEventDetail:
    breeding_event: BreedingEvent
    kits: list[Kit]


async def execute(uow: UnitOfWork, farm_id: UUID, breeding_event_id: UUID) -> BreedingEventDetail:
    event = await uow.breeding_events.get(farm_id, breeding_event_id)
    if event is None:
        raise NotFound(f"Breeding event {breeding_event_id} not found")
    kits = await uow.kits.list_for_event(event.id)
    return BreedingEventDetail(breeding_event=event, kits=kits)
