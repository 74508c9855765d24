from __future__ import annotations

from datetime import datetime
from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm_settings import resolve_farm_timezone
from rabbitry.domain.models.reminder import Reminder
from rabbitry.utils.datetime_tz import DEFAULT_TIMEZONE_NAME, local_today


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    default_timezone: str = DEFAULT_TIMEZONE_NAME,
    now: datetime | None = None,
) -> list[Reminder]:
    """Pending reminders to surface on the farm's current local day."""
    tz = await resolve_farm_timezone(uow, farm_id, default_timezone)
    today = local_today(tz, now)
    return await uow.reminders.list_due(farm_id, today)
