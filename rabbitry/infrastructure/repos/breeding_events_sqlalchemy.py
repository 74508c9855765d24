from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ConflictError
from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.infrastructure.db.orm.breeding_event import BreedingEventORM
from rabbitry.utils.datetime_tz import ensure_utc


class BreedingEventsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingEventORM) -> BreedingEvent:
        return BreedingEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            doe_id=orm.doe_id,
            buck_id=orm.buck_id,
            mating_date=orm.mating_date,
            expected_birth_date=orm.expected_birth_date,
            actual_birth_date=orm.actual_birth_date,
            litter_size=orm.litter_size,
            notes=orm.notes,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
        )

    def _active(self, farm_id: UUID):
        return (
            select(BreedingEventORM)
            .where(BreedingEventORM.farm_id == farm_id)
            .where(BreedingEventORM.deleted_at.is_(None))
        )

    async def add(self, event: BreedingEvent) -> BreedingEvent:
        orm = BreedingEventORM(
            id=event.id,
            farm_id=event.farm_id,
            doe_id=event.doe_id,
            buck_id=event.buck_id,
            mating_date=event.mating_date,
            expected_birth_date=event.expected_birth_date,
            actual_birth_date=event.actual_birth_date,
            litter_size=event.litter_size,
            notes=event.notes,
            created_at=event.created_at,
            updated_at=event.updated_at,
            version=event.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # ux_breeding_events_open_doe
            raise ConflictError(
                f"Doe {event.doe_id} already has an open breeding event",
                details={"doe_id": str(event.doe_id)},
            ) from exc
        return self._to_domain(orm)

    async def update(self, event: BreedingEvent, expected_version: int) -> BreedingEvent:
        stmt = (
            update(BreedingEventORM)
            .where(BreedingEventORM.id == event.id)
            .where(BreedingEventORM.version == expected_version)
            .values(
                actual_birth_date=event.actual_birth_date,
                litter_size=event.litter_size,
                notes=event.notes,
                deleted_at=event.deleted_at,
                updated_at=event.updated_at,
                version=event.version,
            )
        )
        result = await self.session.execute(stmt)
        if (result.rowcount or 0) != 1:
            raise ConflictError(
                f"Breeding event {event.id} was modified concurrently",
                details={"expected_version": expected_version},
            )
        return event

    async def get(self, farm_id: UUID, event_id: UUID) -> BreedingEvent | None:
        stmt = self._active(farm_id).where(BreedingEventORM.id == event_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_open_for_doe(self, farm_id: UUID, doe_id: UUID) -> BreedingEvent | None:
        stmt = (
            self._active(farm_id)
            .where(BreedingEventORM.doe_id == doe_id)
            .where(BreedingEventORM.actual_birth_date.is_(None))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_buck_matings(
        self,
        farm_id: UUID,
        buck_id: UUID,
        date_from: date,
        date_to: date,
    ) -> list[BreedingEvent]:
        stmt = (
            self._active(farm_id)
            .where(BreedingEventORM.buck_id == buck_id)
            .where(BreedingEventORM.mating_date >= date_from)
            .where(BreedingEventORM.mating_date <= date_to)
            .order_by(BreedingEventORM.mating_date)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def get_latest_completed(self, farm_id: UUID, doe_id: UUID) -> BreedingEvent | None:
        events = await self.list_recent_completed(farm_id, doe_id, limit=1)
        return events[0] if events else None

    async def list_recent_completed(
        self,
        farm_id: UUID,
        doe_id: UUID,
        limit: int = 3,
    ) -> list[BreedingEvent]:
        stmt = (
            self._active(farm_id)
            .where(BreedingEventORM.doe_id == doe_id)
            .where(BreedingEventORM.actual_birth_date.is_not(None))
            .order_by(BreedingEventORM.actual_birth_date.desc(), BreedingEventORM.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list(
        self,
        farm_id: UUID,
        doe_id: UUID | None = None,
        open_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[BreedingEvent]:
        stmt = self._active(farm_id)
        if doe_id:
            stmt = stmt.where(BreedingEventORM.doe_id == doe_id)
        if open_only:
            stmt = stmt.where(BreedingEventORM.actual_birth_date.is_(None))
        stmt = stmt.order_by(BreedingEventORM.mating_date.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
