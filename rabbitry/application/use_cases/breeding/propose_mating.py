from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID

from rabbitry.application.errors import ConflictError, ValidationError
from rabbitry.application.events.models import MatingRecordedEvent
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm_settings import resolve_farm_timezone
from rabbitry.domain.models.breeding_event import BUCK_REST_DAYS, GESTATION_DAYS, BreedingEvent
from rabbitry.domain.models.reminder import Reminder
from rabbitry.domain.services import alert_cascade
from rabbitry.domain.services.breeding_rules import validate_mating
from rabbitry.utils.datetime_tz import DEFAULT_TIMEZONE_NAME, local_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProposeMatingInput:
    doe_id: UUID
    buck_id: UUID
    mating_date: date
    notes: str | None = None


@dataclass(slots=True)
class ProposeMatingOutput:
    breeding_event: BreedingEvent
    reminders: list[Reminder]


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: ProposeMatingInput,
    *,
    gestation_days: int = GESTATION_DAYS,
    default_timezone: str = DEFAULT_TIMEZONE_NAME,
    now: datetime | None = None,
) -> ProposeMatingOutput:
    if not isinstance(payload.mating_date, date) or isinstance(payload.mating_date, datetime):
        raise ValidationError("mating_date must be a calendar date")
    if payload.doe_id == payload.buck_id:
        raise ValidationError("Doe and buck must be different animals")

    doe = await uow.rabbits.get(farm_id, payload.doe_id)
    buck = await uow.rabbits.get(farm_id, payload.buck_id)

    window = timedelta(days=BUCK_REST_DAYS)
    buck_matings = (
        await uow.breeding_events.list_buck_matings(
            farm_id,
            payload.buck_id,
            payload.mating_date - window,
            payload.mating_date + window,
        )
        if buck is not None
        else []
    )
    doe_last_birth = (
        await uow.breeding_events.get_latest_completed(farm_id, payload.doe_id)
        if doe is not None
        else None
    )

    check = validate_mating(
        farm_id,
        doe,
        buck,
        payload.mating_date,
        buck_matings=buck_matings,
        doe_last_birth=doe_last_birth,
    )
    if not check.ok:
        logger.info(
            "Mating rejected for doe %s and buck %s: %s",
            payload.doe_id,
            payload.buck_id,
            check.reason.value,
        )
        raise ValidationError(check.message, details={"reason": check.reason.value})

    open_event = await uow.breeding_events.get_open_for_doe(farm_id, doe.id)
    if open_event is not None:
        raise ConflictError(
            f"Doe {doe.tag} already has an open breeding event",
            details={"breeding_event_id": str(open_event.id)},
        )

    event = BreedingEvent.create(
        farm_id=farm_id,
        doe_id=doe.id,
        buck_id=buck.id,
        mating_date=payload.mating_date,
        gestation_days=gestation_days,
        notes=payload.notes,
    )
    created = await uow.breeding_events.add(event)

    doe.start_pregnancy(created.mating_date, created.expected_birth_date)
    await uow.rabbits.update(doe)

    tz = await resolve_farm_timezone(uow, farm_id, default_timezone)
    reminders = alert_cascade.mating_reminders(created, doe, buck, tz, local_today(tz, now))
    saved_reminders = await uow.reminders.add_many(reminders)

    uow.add_event(
        MatingRecordedEvent(
            farm_id=farm_id,
            breeding_event_id=created.id,
            doe_id=doe.id,
            buck_id=buck.id,
            mating_date=created.mating_date,
            expected_birth_date=created.expected_birth_date,
            doe_tag=doe.tag,
            buck_tag=buck.tag,
        )
    )
    logger.info(
        "Breeding event %s created for doe %s (expected birth %s, %d reminders)",
        created.id,
        doe.id,
        created.expected_birth_date,
        len(saved_reminders),
    )
    return ProposeMatingOutput(breeding_event=created, reminders=saved_reminders)
