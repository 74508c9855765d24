from __future__ import annotations

from uuid import UUID
from zoneinfo import ZoneInfo

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.farm_settings import FarmSettings
from rabbitry.utils.datetime_tz import resolve_timezone


async def execute(uow: UnitOfWork, farm_id: UUID, default_timezone: str) -> FarmSettings:
    settings = await uow.farm_settings.get(farm_id)
    if settings is None:
        return FarmSettings(farm_id=farm_id, timezone=default_timezone)
    if not settings.timezone:
        settings.timezone = default_timezone
    return settings


async def resolve_farm_timezone(uow: UnitOfWork, farm_id: UUID, default_timezone: str) -> ZoneInfo:
    settings = await uow.farm_settings.get(farm_id)
    return resolve_timezone(settings.timezone if settings else None, default_timezone)
