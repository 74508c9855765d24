from __future__ import annotations

from typing import Iterable
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.domain.models.kit import Kit
from rabbitry.infrastructure.db.orm.kit import KitORM
from rabbitry.utils.datetime_tz import ensure_utc


class KitsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: KitORM) -> Kit:
        return Kit(
            id=orm.id,
            farm_id=orm.farm_id,
            breeding_event_id=orm.breeding_event_id,
            kit_number=orm.kit_number,
            sex=orm.sex,
            color=orm.color,
            birth_weight=orm.birth_weight,
            status=orm.status,
            weaning_date=orm.weaning_date,
            notes=orm.notes,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
        )

    async def add_many(self, kits: Iterable[Kit]) -> list[Kit]:
        orms = [
            KitORM(
                id=kit.id,
                farm_id=kit.farm_id,
                breeding_event_id=kit.breeding_event_id,
                kit_number=kit.kit_number,
                sex=kit.sex,
                color=kit.color,
                birth_weight=kit.birth_weight,
                status=kit.status,
                weaning_date=kit.weaning_date,
                notes=kit.notes,
                created_at=kit.created_at,
            )
            for kit in kits
        ]
        self.session.add_all(orms)
        await self.session.flush()
        return [self._to_domain(orm) for orm in orms]

    async def count_for_event(self, breeding_event_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(KitORM)
            .where(KitORM.breeding_event_id == breeding_event_id)
            .where(KitORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def find_existing_numbers(self, farm_id: UUID, kit_numbers: list[str]) -> list[str]:
        if not kit_numbers:
            return []
        stmt = (
            select(KitORM.kit_number)
            .where(KitORM.farm_id == farm_id)
            .where(KitORM.kit_number.in_(kit_numbers))
            .where(KitORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_event(self, breeding_event_id: UUID) -> list[Kit]:
        stmt = (
            select(KitORM)
            .where(KitORM.breeding_event_id == breeding_event_id)
            .where(KitORM.deleted_at.is_(None))
            .order_by(KitORM.kit_number)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
