from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.services.breeding_rules import (
    MatingRejection,
    earliest_mating_after_birth,
    validate_mating,
)

FARM = uuid4()


def _doe(**kwargs) -> Rabbit:
    return Rabbit.create(farm_id=kwargs.pop("farm_id", FARM), tag="D1", sex="female", **kwargs)


def _buck(**kwargs) -> Rabbit:
    return Rabbit.create(farm_id=kwargs.pop("farm_id", FARM), tag="B1", sex="male", **kwargs)


def _mating(doe: Rabbit, buck: Rabbit, on: date) -> BreedingEvent:
    return BreedingEvent.create(farm_id=FARM, doe_id=doe.id, buck_id=buck.id, mating_date=on)


def test_accepts_fresh_pair():
    check = validate_mating(FARM, _doe(), _buck(), date(2025, 6, 1))
    assert check.ok
    assert check.reason is None


def test_rejects_missing_or_wrong_sex_doe():
    buck = _buck()
    assert validate_mating(FARM, None, buck, date(2025, 6, 1)).reason is MatingRejection.DOE_INVALID
    assert (
        validate_mating(FARM, _buck(), buck, date(2025, 6, 1)).reason
        is MatingRejection.DOE_INVALID
    )


def test_rejects_doe_from_other_farm_or_deleted():
    buck = _buck()
    other_farm = _doe(farm_id=uuid4())
    assert validate_mating(FARM, other_farm, buck, date(2025, 6, 1)).reason is MatingRejection.DOE_INVALID
    deleted = _doe()
    deleted.deleted_at = datetime.now(timezone.utc)
    assert validate_mating(FARM, deleted, buck, date(2025, 6, 1)).reason is MatingRejection.DOE_INVALID


def test_rejects_invalid_buck():
    doe = _doe()
    assert validate_mating(FARM, doe, None, date(2025, 6, 1)).reason is MatingRejection.BUCK_INVALID
    assert validate_mating(FARM, doe, _doe(), date(2025, 6, 1)).reason is MatingRejection.BUCK_INVALID


def test_doe_checked_before_buck():
    check = validate_mating(FARM, None, None, date(2025, 6, 1))
    assert check.reason is MatingRejection.DOE_INVALID


def test_buck_rest_window_is_symmetric():
    doe, buck = _doe(), _buck()
    served = date(2025, 6, 10)
    history = [_mating(_doe(), buck, served)]
    for offset in (-2, -1, 0, 1, 2):
        check = validate_mating(
            FARM, doe, buck, served + timedelta(days=offset), buck_matings=history
        )
        assert check.reason is MatingRejection.BUCK_RESTING, offset


def test_buck_accepted_three_days_apart():
    doe, buck = _doe(), _buck()
    served = date(2025, 6, 10)
    history = [_mating(_doe(), buck, served)]
    assert validate_mating(FARM, doe, buck, served + timedelta(days=3), buck_matings=history).ok
    assert validate_mating(FARM, doe, buck, served - timedelta(days=3), buck_matings=history).ok


def test_retracted_buck_matings_are_ignored():
    doe, buck = _doe(), _buck()
    previous = _mating(_doe(), buck, date(2025, 6, 10))
    previous.retract()
    assert validate_mating(FARM, doe, buck, date(2025, 6, 11), buck_matings=[previous]).ok


def test_doe_rest_after_weaning():
    doe, buck = _doe(), _buck()
    last = _mating(doe, _buck(), date(2025, 5, 1))
    last.record_birth(date(2025, 6, 1), 7)
    assert earliest_mating_after_birth(date(2025, 6, 1)) == date(2025, 7, 20)

    early = validate_mating(FARM, doe, buck, date(2025, 7, 19), doe_last_birth=last)
    assert early.reason is MatingRejection.DOE_RESTING
    assert "2025-07-20" in early.message

    assert validate_mating(FARM, doe, buck, date(2025, 7, 20), doe_last_birth=last).ok


def test_buck_rule_reported_before_doe_rule():
    doe, buck = _doe(), _buck()
    last = _mating(doe, _buck(), date(2025, 5, 1))
    last.record_birth(date(2025, 6, 1), 7)
    history = [_mating(_doe(), buck, date(2025, 6, 10))]
    check = validate_mating(
        FARM, doe, buck, date(2025, 6, 11), buck_matings=history, doe_last_birth=last
    )
    assert check.reason is MatingRejection.BUCK_RESTING
