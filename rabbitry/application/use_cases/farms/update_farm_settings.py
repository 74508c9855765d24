from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.farm_settings import FarmSettings


@dataclass(slots=True)
class UpdateFarmSettingsInput:
    timezone: str | None = None
    contact_emails: list[str] = field(default_factory=list)


async def execute(
    uow: UnitOfWork, farm_id: UUID, payload: UpdateFarmSettingsInput
) -> FarmSettings:
    if payload.timezone:
        try:
            ZoneInfo(payload.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(f"Unknown timezone: {payload.timezone}") from exc
    # Address syntax is checked by FarmSettingsUpdate
    emails = [e.strip() for e in payload.contact_emails if e and e.strip()]

    current = await uow.farm_settings.get(farm_id)
    if current is None:
        current = FarmSettings(farm_id=farm_id)
    current.timezone = payload.timezone or None
    current.contact_emails = emails
    current.updated_at = datetime.now(timezone.utc)
    return await uow.farm_settings.upsert(current)
