from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.infrastructure.db.orm.rabbit import RabbitORM
from rabbitry.utils.datetime_tz import ensure_utc


class RabbitsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RabbitORM) -> Rabbit:
        return Rabbit(
            id=orm.id,
            farm_id=orm.farm_id,
            tag=orm.tag,
            sex=orm.sex,
            name=orm.name,
            breed=orm.breed,
            hutch_id=orm.hutch_id,
            birth_date=orm.birth_date,
            is_pregnant=orm.is_pregnant,
            pregnancy_start_date=orm.pregnancy_start_date,
            expected_birth_date=orm.expected_birth_date,
            last_birth_date=orm.last_birth_date,
            total_litters=orm.total_litters,
            total_kits=orm.total_kits,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
        )

    async def add(self, rabbit: Rabbit) -> Rabbit:
        orm = RabbitORM(
            id=rabbit.id,
            farm_id=rabbit.farm_id,
            tag=rabbit.tag,
            sex=rabbit.sex,
            name=rabbit.name,
            breed=rabbit.breed,
            hutch_id=rabbit.hutch_id,
            birth_date=rabbit.birth_date,
            is_pregnant=rabbit.is_pregnant,
            pregnancy_start_date=rabbit.pregnancy_start_date,
            expected_birth_date=rabbit.expected_birth_date,
            last_birth_date=rabbit.last_birth_date,
            total_litters=rabbit.total_litters,
            total_kits=rabbit.total_kits,
            created_at=rabbit.created_at,
            updated_at=rabbit.updated_at,
            version=rabbit.version,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, rabbit_id: UUID) -> Rabbit | None:
        stmt = (
            select(RabbitORM)
            .where(RabbitORM.farm_id == farm_id)
            .where(RabbitORM.id == rabbit_id)
            .where(RabbitORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, rabbit: Rabbit) -> Rabbit:
        orm = await self.session.get(RabbitORM, rabbit.id)
        if not orm:
            raise ValueError(f"Rabbit {rabbit.id} not found")
        orm.tag = rabbit.tag
        orm.name = rabbit.name
        orm.breed = rabbit.breed
        orm.hutch_id = rabbit.hutch_id
        orm.birth_date = rabbit.birth_date
        orm.is_pregnant = rabbit.is_pregnant
        orm.pregnancy_start_date = rabbit.pregnancy_start_date
        orm.expected_birth_date = rabbit.expected_birth_date
        orm.last_birth_date = rabbit.last_birth_date
        orm.total_litters = rabbit.total_litters
        orm.total_kits = rabbit.total_kits
        orm.deleted_at = rabbit.deleted_at
        orm.updated_at = rabbit.updated_at
        orm.version = rabbit.version
        await self.session.flush()
        return self._to_domain(orm)

    async def list(
        self,
        farm_id: UUID,
        sex: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Rabbit]:
        stmt = (
            select(RabbitORM)
            .where(RabbitORM.farm_id == farm_id)
            .where(RabbitORM.deleted_at.is_(None))
        )
        if sex:
            stmt = stmt.where(RabbitORM.sex == sex)
        stmt = stmt.order_by(RabbitORM.tag).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
