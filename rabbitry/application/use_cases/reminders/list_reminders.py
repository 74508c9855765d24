from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.reminder import (
    Reminder,
    ReminderCategory,
    ReminderSeverity,
    ReminderStatus,
)


def _check(value: str | None, enum_cls, label: str) -> str | None:
    if value is None:
        return None
    valid = {m.value for m in enum_cls}
    if value not in valid:
        raise ValidationError(f"Invalid {label}. Must be one of: {', '.join(sorted(valid))}")
    return value


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    category: str | None = None,
    severity: str | None = None,
    status: str | None = None,
    rabbit_id: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Reminder]:
    if limit <= 0 or limit > 200:
        raise ValidationError("limit must be between 1 and 200")
    return await uow.reminders.list(
        farm_id,
        category=_check(category, ReminderCategory, "category"),
        severity=_check(severity, ReminderSeverity, "severity"),
        status=_check(status, ReminderStatus, "status"),
        rabbit_id=rabbit_id,
        limit=limit,
        offset=offset,
    )
