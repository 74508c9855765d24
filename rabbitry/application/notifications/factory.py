from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rabbitry.domain.services.culling import CullingReason
from rabbitry.utils.datetime_tz import format_day_date

from .types import NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    priority: str
    data: dict[str, Any]


_CULLING_REASON_TEXT = {
    CullingReason.CHRONIC_SMALL_LITTERS.value: "low litter size (<5) over 3 generations",
    CullingReason.OUT_OF_RANGE_LITTER_SIZE.value: "litter size {litter_size}",
}


def _short_label(s: str | None, *, max_len: int = 16) -> str | None:
    """Shorten labels like rabbit tags to a safe length with ellipsis."""
    if not s:
        return s
    s = str(s)
    return s if len(s) <= max_len else (s[: max(0, max_len - 1)] + "…")


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """
    Central place to build notification title/message/data from templates.
    Keep strings easy to find and translate.
    """
    if ntype == NotificationType.MATING_RECORDED:
        doe: str = _short_label(kwargs.get("doe_tag")) or "Doe"
        buck: str = _short_label(kwargs.get("buck_tag")) or "Buck"
        mating_date = kwargs.get("mating_date")
        expected = kwargs.get("expected_birth_date")
        title = f"❤️ Breeding recorded: {doe} x {buck}"
        message = (
            f"Mated on {format_day_date(mating_date)}. "
            f"Expected birth date: {format_day_date(expected)}"
        )
        data = {
            "breeding_event_id": str(kwargs.get("breeding_event_id")),
            "doe_id": str(kwargs.get("doe_id")),
            "buck_id": str(kwargs.get("buck_id")),
            "mating_date": str(mating_date) if mating_date else None,
            "expected_birth_date": str(expected) if expected else None,
        }
        return BuiltNotification(ntype, title, message, "medium", data)

    if ntype == NotificationType.BIRTH_RECORDED:
        doe = _short_label(kwargs.get("doe_tag")) or "Doe"
        litter_size = int(kwargs.get("litter_size", 0) or 0)
        birth_date = kwargs.get("actual_birth_date")
        title = f"🐣 Litter recorded for {doe}"
        message = f"{litter_size} kits born on {format_day_date(birth_date)}"
        data = {
            "breeding_event_id": str(kwargs.get("breeding_event_id")),
            "doe_id": str(kwargs.get("doe_id")),
            "litter_size": litter_size,
            "actual_birth_date": str(birth_date) if birth_date else None,
        }
        return BuiltNotification(ntype, title, message, "medium", data)

    if ntype == NotificationType.CULLING_ALERT:
        doe = kwargs.get("doe_tag") or str(kwargs.get("doe_id"))
        reasons: list[str] = list(kwargs.get("reasons") or [])
        litter_size = kwargs.get("litter_size")
        explained = [
            _CULLING_REASON_TEXT.get(reason, reason).format(litter_size=litter_size)
            for reason in reasons
        ]
        title = "Doe Culling Alert"
        message = f"Doe {doe} recommended for culling due to " + " and ".join(explained) + "."
        data = {
            "doe_id": str(kwargs.get("doe_id")),
            "farm_id": str(kwargs.get("farm_id")),
            "breeding_event_id": str(kwargs.get("breeding_event_id")),
            "reasons": reasons,
            "litter_size": litter_size,
        }
        return BuiltNotification(ntype, title, message, "high", data)

    # Fallback to pass-through
    return BuiltNotification(
        ntype,
        title=str(kwargs.get("title", "Notification")),
        message=str(kwargs.get("message", "")),
        priority=str(kwargs.get("priority", "medium")),
        data=dict(kwargs.get("data", {})),
    )
