from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.models.reminder import ReminderCategory, ReminderSeverity, ReminderStatus
from rabbitry.domain.services import alert_cascade

NAIROBI = ZoneInfo("Africa/Nairobi")
FARM = uuid4()


def _pair():
    doe = Rabbit.create(farm_id=FARM, tag="D7", sex="female", hutch_id="H-3")
    buck = Rabbit.create(farm_id=FARM, tag="B2", sex="male")
    return doe, buck


def test_mating_cascade_dates():
    doe, buck = _pair()
    event = BreedingEvent.create(
        farm_id=FARM, doe_id=doe.id, buck_id=buck.id, mating_date=date(2025, 6, 1)
    )
    assert event.expected_birth_date == date(2025, 7, 2)

    reminders = alert_cascade.mating_reminders(event, doe, buck, NAIROBI, date(2025, 6, 1))
    assert len(reminders) == 6

    ack = reminders[0]
    assert ack.name == "Breeding Success for D7 and B2"
    assert ack.notify_on == [date(2025, 6, 1)]
    assert "July 2, 2025" in ack.message

    nesting = reminders[1]
    assert nesting.name == "Add Nesting Box for D7"
    assert nesting.category is ReminderCategory.BREEDING
    assert nesting.severity is ReminderSeverity.HIGH
    assert nesting.notify_on == [date(2025, 6, 26), date(2025, 6, 27)]
    assert nesting.trigger_at == datetime(2025, 6, 26, 21, 0, tzinfo=timezone.utc)
    assert "hutch H-3" in nesting.message

    checks = reminders[2:]
    assert [r.notify_on[-1] for r in checks] == [
        date(2025, 6, 29),
        date(2025, 6, 30),
        date(2025, 7, 1),
        date(2025, 7, 2),
    ]
    assert all(r.category is ReminderCategory.BIRTH for r in checks)
    assert all(r.status is ReminderStatus.PENDING for r in reminders)
    assert all(r.rabbit_id == doe.id and r.breeding_event_id == event.id for r in reminders)


def test_birth_cascade_dates():
    doe, buck = _pair()
    event = BreedingEvent.create(
        farm_id=FARM, doe_id=doe.id, buck_id=buck.id, mating_date=date(2025, 6, 1)
    )
    event.record_birth(date(2025, 7, 1), 8)

    fostering, remove_box, wean = alert_cascade.birth_reminders(event, doe, NAIROBI)
    assert fostering.notify_on == [date(2025, 7, 4), date(2025, 7, 5)]
    assert remove_box.notify_on == [date(2025, 7, 20), date(2025, 7, 21)]
    assert wean.name == "Wean Kits for D7"
    assert wean.notify_on == [date(2025, 8, 11), date(2025, 8, 12)]
    assert wean.severity is ReminderSeverity.HIGH
    assert "August 12, 2025" in wean.message


def test_relocation_reminder_on_weaning_day():
    doe, buck = _pair()
    event = BreedingEvent.create(
        farm_id=FARM, doe_id=doe.id, buck_id=buck.id, mating_date=date(2025, 6, 1)
    )
    event.record_birth(date(2025, 7, 1), 8)
    relocation = alert_cascade.kit_relocation_reminder(event, doe, NAIROBI)
    assert relocation.name == "Relocate Kits for D7"
    assert relocation.notify_on == [date(2025, 8, 11), date(2025, 8, 12)]


def test_trigger_follows_farm_zone():
    doe, buck = _pair()
    event = BreedingEvent.create(
        farm_id=FARM, doe_id=doe.id, buck_id=buck.id, mating_date=date(2025, 6, 1)
    )
    la = ZoneInfo("America/Los_Angeles")
    nesting = alert_cascade.mating_reminders(event, doe, buck, la, date(2025, 6, 1))[1]
    assert nesting.trigger_at == datetime(2025, 6, 27, 7, 0, tzinfo=timezone.utc)
