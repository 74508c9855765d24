from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from rabbitry.application.errors import ConflictError, NotFound, ValidationError
from rabbitry.application.events.models import BirthRecordedEvent, CullingRecommendedEvent
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm_settings import resolve_farm_timezone
from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.reminder import Reminder, ReminderCategory, ReminderStatus
from rabbitry.domain.services import alert_cascade, culling
from rabbitry.utils.datetime_tz import DEFAULT_TIMEZONE_NAME

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordBirthInput:
    actual_birth_date: date
    litter_size: int
    notes: str | None = None


@dataclass(slots=True)
class RecordBirthOutput:
    breeding_event: BreedingEvent
    reminders: list[Reminder]
    completed_reminders: int
    culling: culling.CullingDecision


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    breeding_event_id: UUID,
    payload: RecordBirthInput,
    *,
    default_timezone: str = DEFAULT_TIMEZONE_NAME,
) -> RecordBirthOutput:
    if not isinstance(payload.actual_birth_date, date) or isinstance(
        payload.actual_birth_date, datetime
    ):
        raise ValidationError("actual_birth_date must be a calendar date")
    if payload.litter_size is None or payload.litter_size < 0:
        raise ValidationError("litter_size must be zero or a positive integer")

    event = await uow.breeding_events.get(farm_id, breeding_event_id)
    if event is None:
        raise NotFound(f"Breeding event {breeding_event_id} not found")
    if not event.is_open:
        raise ConflictError(
            f"Birth already recorded for breeding event {event.id}",
            details={"actual_birth_date": str(event.actual_birth_date)},
        )
    if payload.actual_birth_date < event.mating_date:
        raise ValidationError("actual_birth_date cannot be earlier than the mating date")

    doe = await uow.rabbits.get(farm_id, event.doe_id)
    if doe is None:
        raise NotFound(f"Doe {event.doe_id} not found")

    expected_version = event.version
    event.record_birth(payload.actual_birth_date, payload.litter_size, payload.notes)
    updated = await uow.breeding_events.update(event, expected_version=expected_version)

    doe.record_litter(payload.actual_birth_date, payload.litter_size)
    await uow.rabbits.update(doe)

    # The pregnancy cascade (nesting box, birth checks) is moot now
    completed = await uow.reminders.close_pending_for_rabbit(
        doe.id, [ReminderCategory.BREEDING], ReminderStatus.COMPLETED
    )

    tz = await resolve_farm_timezone(uow, farm_id, default_timezone)
    saved_reminders = await uow.reminders.add_many(
        alert_cascade.birth_reminders(updated, doe, tz)
    )

    previous = await uow.breeding_events.list_recent_completed(
        farm_id, doe.id, limit=culling.HISTORY_WINDOW
    )
    history = [updated] + [e for e in previous if e.id != updated.id]
    decision = culling.evaluate(
        [e.litter_size or 0 for e in history],
        current_litter_size=payload.litter_size,
    )

    uow.add_event(
        BirthRecordedEvent(
            farm_id=farm_id,
            breeding_event_id=updated.id,
            doe_id=doe.id,
            actual_birth_date=payload.actual_birth_date,
            litter_size=payload.litter_size,
            doe_tag=doe.tag,
        )
    )
    if decision.recommend:
        uow.add_event(
            CullingRecommendedEvent(
                farm_id=farm_id,
                doe_id=doe.id,
                breeding_event_id=updated.id,
                reasons=tuple(r.value for r in decision.reasons),
                litter_size=payload.litter_size,
                doe_tag=doe.tag,
            )
        )
        logger.info(
            "Doe %s recommended for culling: %s",
            doe.id,
            ", ".join(r.value for r in decision.reasons),
        )

    logger.info(
        "Birth recorded on breeding event %s: %d kits, %d breeding reminders completed",
        updated.id,
        payload.litter_size,
        completed,
    )
    return RecordBirthOutput(
        breeding_event=updated,
        reminders=saved_reminders,
        completed_reminders=completed,
        culling=decision,
    )
