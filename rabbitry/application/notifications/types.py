from __future__ import annotations


class NotificationType:
    """Canonical notification type names used across backend/frontend."""

    MATING_RECORDED = "mating_recorded"
    BIRTH_RECORDED = "birth_recorded"
    CULLING_ALERT = "culling_alert"


ALL_TYPES = {
    NotificationType.MATING_RECORDED,
    NotificationType.BIRTH_RECORDED,
    NotificationType.CULLING_ALERT,
}
