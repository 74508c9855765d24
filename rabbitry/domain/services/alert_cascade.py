from __future__ import annotations

from datetime import date, timedelta
from zoneinfo import ZoneInfo

from rabbitry.domain.models.breeding_event import WEANING_DAYS, BreedingEvent
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.models.reminder import Reminder, ReminderCategory, ReminderSeverity
from rabbitry.utils.datetime_tz import format_day_date, local_date_to_utc_midnight

NESTING_BOX_DAY = 26
BIRTH_CHECK_FIRST_DAY = 28
BIRTH_CHECK_DAYS = 4
FOSTERING_CHECK_DAY = 4
REMOVE_NESTING_BOX_DAY = 20


def _hutch_label(doe: Rabbit) -> str:
    return doe.hutch_id or "unknown"


def _scheduled(
    event: BreedingEvent,
    doe: Rabbit,
    tz: ZoneInfo,
    *,
    name: str,
    category: ReminderCategory,
    severity: ReminderSeverity,
    trigger_date: date,
    message: str,
) -> Reminder:
    # Surfaced the day before and on the trigger date itself
    return Reminder.create(
        farm_id=event.farm_id,
        name=name,
        category=category,
        severity=severity,
        trigger_at=local_date_to_utc_midnight(trigger_date, tz),
        message=message,
        notify_on=[trigger_date - timedelta(days=1), trigger_date],
        rabbit_id=doe.id,
        hutch_id=doe.hutch_id,
        breeding_event_id=event.id,
    )


def mating_reminders(
    event: BreedingEvent,
    doe: Rabbit,
    buck: Rabbit,
    tz: ZoneInfo,
    today: date,
) -> list[Reminder]:
    """Acknowledgment plus the nesting-box and birth-check reminders of a mating."""
    mating = event.mating_date
    acknowledgment = Reminder.create(
        farm_id=event.farm_id,
        name=f"Breeding Success for {doe.tag} and {buck.tag}",
        category=ReminderCategory.BREEDING,
        severity=ReminderSeverity.MEDIUM,
        trigger_at=local_date_to_utc_midnight(today, tz),
        message=(
            f"Breeding recorded for doe {doe.tag} and buck {buck.tag} on "
            f"{format_day_date(mating)}. Expected birth date: "
            f"{format_day_date(event.expected_birth_date)}"
        ),
        notify_on=[today],
        rabbit_id=doe.id,
        hutch_id=doe.hutch_id,
        breeding_event_id=event.id,
    )
    reminders = [acknowledgment]

    nesting_day = mating + timedelta(days=NESTING_BOX_DAY)
    reminders.append(
        _scheduled(
            event,
            doe,
            tz,
            name=f"Add Nesting Box for {doe.tag}",
            category=ReminderCategory.BREEDING,
            severity=ReminderSeverity.HIGH,
            trigger_date=nesting_day,
            message=(
                f"Add nesting box for rabbit {doe.tag} on hutch {_hutch_label(doe)} "
                f"by {format_day_date(nesting_day)}"
            ),
        )
    )

    for offset in range(BIRTH_CHECK_DAYS):
        check_day = mating + timedelta(days=BIRTH_CHECK_FIRST_DAY + offset)
        reminders.append(
            _scheduled(
                event,
                doe,
                tz,
                name=f"Check Birth for {doe.tag}",
                category=ReminderCategory.BIRTH,
                severity=ReminderSeverity.HIGH,
                trigger_date=check_day,
                message=(
                    f"Check for birth of rabbit {doe.tag} on hutch {_hutch_label(doe)} "
                    f"on {format_day_date(check_day)}"
                ),
            )
        )
    return reminders


def birth_reminders(event: BreedingEvent, doe: Rabbit, tz: ZoneInfo) -> list[Reminder]:
    """Fostering, nesting-box removal and weaning reminders of a recorded birth."""
    if event.actual_birth_date is None:
        raise ValueError(f"Breeding event {event.id} has no recorded birth")
    birth = event.actual_birth_date
    fostering_day = birth + timedelta(days=FOSTERING_CHECK_DAY)
    remove_box_day = birth + timedelta(days=REMOVE_NESTING_BOX_DAY)
    wean_day = birth + timedelta(days=WEANING_DAYS)
    hutch = _hutch_label(doe)
    return [
        _scheduled(
            event,
            doe,
            tz,
            name=f"Fostering Check for {doe.tag}",
            category=ReminderCategory.BIRTH,
            severity=ReminderSeverity.MEDIUM,
            trigger_date=fostering_day,
            message=(
                f"Check fostering needs for rabbit {doe.tag} on hutch {hutch} "
                f"by {format_day_date(fostering_day)}"
            ),
        ),
        _scheduled(
            event,
            doe,
            tz,
            name=f"Remove Nesting Box for {doe.tag}",
            category=ReminderCategory.BIRTH,
            severity=ReminderSeverity.MEDIUM,
            trigger_date=remove_box_day,
            message=(
                f"Remove nesting box for rabbit {doe.tag} on hutch {hutch} "
                f"by {format_day_date(remove_box_day)}"
            ),
        ),
        _scheduled(
            event,
            doe,
            tz,
            name=f"Wean Kits for {doe.tag}",
            category=ReminderCategory.BIRTH,
            severity=ReminderSeverity.HIGH,
            trigger_date=wean_day,
            message=(
                f"Wean kits for rabbit {doe.tag} on hutch {hutch} "
                f"by {format_day_date(wean_day)}"
            ),
        ),
    ]


def kit_relocation_reminder(event: BreedingEvent, doe: Rabbit, tz: ZoneInfo) -> Reminder:
    if event.actual_birth_date is None:
        raise ValueError(f"Breeding event {event.id} has no recorded birth")
    wean_day = event.actual_birth_date + timedelta(days=WEANING_DAYS)
    return _scheduled(
        event,
        doe,
        tz,
        name=f"Relocate Kits for {doe.tag}",
        category=ReminderCategory.BIRTH,
        severity=ReminderSeverity.MEDIUM,
        trigger_date=wean_day,
        message=(
            f"Relocate kits for rabbit {doe.tag} to individual hutches "
            f"by {format_day_date(wean_day)}"
        ),
    )
