from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm_settings import resolve_farm_timezone
from rabbitry.domain.models.kit import Kit
from rabbitry.domain.models.rabbit import Sex
from rabbitry.domain.models.reminder import Reminder
from rabbitry.domain.services import alert_cascade
from rabbitry.utils.datetime_tz import DEFAULT_TIMEZONE_NAME

logger = logging.getLogger(__name__)

# Kits recorded may exceed the declared litter size by this many
LITTER_SIZE_TOLERANCE = 1


@dataclass(slots=True)
class KitInput:
    kit_number: str
    sex: str | None = None
    color: str | None = None
    birth_weight: Decimal | None = None
    notes: str | None = None


@dataclass(slots=True)
class RecordKitsOutput:
    kits: list[Kit]
    reminder: Reminder | None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    breeding_event_id: UUID,
    kits: list[KitInput],
    *,
    default_timezone: str = DEFAULT_TIMEZONE_NAME,
) -> RecordKitsOutput:
    if not kits:
        raise ValidationError("At least one kit is required")
    numbers = [(k.kit_number or "").strip() for k in kits]
    if any(not n for n in numbers):
        raise ValidationError("kit_number is required for each kit")
    if len(set(numbers)) != len(numbers):
        raise ValidationError("Kit numbers must be unique")
    valid_sexes = {s.value for s in Sex}
    for kit in kits:
        if kit.sex is not None and kit.sex not in valid_sexes:
            raise ValidationError(f"Invalid kit sex: {kit.sex}")
        if kit.birth_weight is not None and kit.birth_weight <= 0:
            raise ValidationError("Birth weight must be a positive number")

    event = await uow.breeding_events.get(farm_id, breeding_event_id)
    if event is None:
        raise NotFound(f"Breeding event {breeding_event_id} not found")
    if event.actual_birth_date is None:
        raise ValidationError("Birth must be recorded before kits can be added")

    existing = await uow.kits.count_for_event(event.id)
    if existing + len(kits) > (event.litter_size or 0) + LITTER_SIZE_TOLERANCE:
        raise ValidationError(
            f"Total kits significantly exceed litter size for breeding event {event.id}"
        )
    duplicates = await uow.kits.find_existing_numbers(farm_id, numbers)
    if duplicates:
        raise ValidationError(f"Duplicate kit numbers: {', '.join(sorted(duplicates))}")

    doe = await uow.rabbits.get(farm_id, event.doe_id)
    if doe is None:
        raise NotFound(f"Doe {event.doe_id} not found")

    created = await uow.kits.add_many(
        [
            Kit.create(
                farm_id=farm_id,
                breeding_event_id=event.id,
                kit_number=number,
                sex=kit.sex,
                color=kit.color,
                birth_weight=kit.birth_weight,
                weaning_date=event.weaning_date,
                notes=kit.notes,
            )
            for number, kit in zip(numbers, kits)
        ]
    )

    tz = await resolve_farm_timezone(uow, farm_id, default_timezone)
    relocation = alert_cascade.kit_relocation_reminder(event, doe, tz)
    reminder = None
    if not await uow.reminders.exists_for_event(event.id, relocation.name):
        saved = await uow.reminders.add_many([relocation])
        reminder = saved[0]

    logger.info("Recorded %d kits for breeding event %s", len(created), event.id)
    return RecordKitsOutput(kits=created, reminder=reminder)
