from __future__ import annotations

from datetime import date
from uuid import uuid4

from rabbitry.application.notifications.factory import build_notification
from rabbitry.application.notifications.types import NotificationType


def test_culling_alert_explains_every_reason():
    doe_id = uuid4()
    built = build_notification(
        NotificationType.CULLING_ALERT,
        doe_id=doe_id,
        doe_tag="D1",
        reasons=["chronic_small_litters", "out_of_range_litter_size"],
        litter_size=3,
    )
    assert built.title == "Doe Culling Alert"
    assert built.priority == "high"
    assert built.message == (
        "Doe D1 recommended for culling due to low litter size (<5) over 3 generations"
        " and litter size 3."
    )
    assert built.data["doe_id"] == str(doe_id)


def test_culling_alert_falls_back_to_doe_id():
    doe_id = uuid4()
    built = build_notification(
        NotificationType.CULLING_ALERT,
        doe_id=doe_id,
        reasons=["out_of_range_litter_size"],
        litter_size=14,
    )
    assert built.message == f"Doe {doe_id} recommended for culling due to litter size 14."


def test_mating_recorded_shortens_long_tags():
    built = build_notification(
        NotificationType.MATING_RECORDED,
        doe_tag="A" * 30,
        buck_tag="B7",
        mating_date=date(2025, 6, 1),
        expected_birth_date=date(2025, 7, 2),
    )
    assert "B7" in built.title
    assert "A" * 30 not in built.title
    assert built.data["expected_birth_date"] == "2025-07-02"
    assert built.priority == "medium"


def test_unknown_type_passes_through():
    built = build_notification("custom", title="Hi", message="There", priority="low")
    assert (built.title, built.message, built.priority) == ("Hi", "There", "low")
    assert built.data == {}
