from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.domain.models.farm_settings import FarmSettings
from rabbitry.infrastructure.db.orm.farm_settings import FarmSettingsORM
from rabbitry.utils.datetime_tz import ensure_utc


class FarmSettingsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmSettingsORM) -> FarmSettings:
        emails = [e for e in (orm.contact_emails or "").split(",") if e]
        return FarmSettings(
            farm_id=orm.farm_id,
            timezone=orm.timezone,
            contact_emails=emails,
            updated_at=ensure_utc(orm.updated_at),
        )

    async def get(self, farm_id: UUID) -> FarmSettings | None:
        orm = await self.session.get(FarmSettingsORM, farm_id)
        return self._to_domain(orm) if orm else None

    async def upsert(self, settings: FarmSettings) -> FarmSettings:
        orm = await self.session.get(FarmSettingsORM, settings.farm_id)
        emails = ",".join(settings.contact_emails) or None
        if orm is None:
            orm = FarmSettingsORM(
                farm_id=settings.farm_id,
                timezone=settings.timezone,
                contact_emails=emails,
                updated_at=settings.updated_at,
            )
            self.session.add(orm)
        else:
            orm.timezone = settings.timezone
            orm.contact_emails = emails
            orm.updated_at = settings.updated_at
        await self.session.flush()
        return self._to_domain(orm)
