from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ConflictError, NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.reminder import ReminderCategory, ReminderStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RetractMatingOutput:
    breeding_event: BreedingEvent
    rejected_reminders: int


async def execute(uow: UnitOfWork, farm_id: UUID, breeding_event_id: UUID) -> RetractMatingOutput:
    event = await uow.breeding_events.get(farm_id, breeding_event_id)
    if event is None:
        raise NotFound(f"Breeding event {breeding_event_id} not found")
    if not event.is_open:
        raise ConflictError("Only breeding events without a recorded birth can be retracted")

    expected_version = event.version
    event.retract()
    updated = await uow.breeding_events.update(event, expected_version=expected_version)

    doe = await uow.rabbits.get(farm_id, event.doe_id)
    if doe is not None:
        doe.clear_pregnancy()
        await uow.rabbits.update(doe)

    rejected = await uow.reminders.close_pending_for_rabbit(
        event.doe_id,
        [ReminderCategory.BREEDING, ReminderCategory.BIRTH],
        ReminderStatus.REJECTED,
    )
    logger.info(
        "Breeding event %s retracted; %d pending reminders rejected", updated.id, rejected
    )
    return RetractMatingOutput(breeding_event=updated, rejected_reminders=rejected)
