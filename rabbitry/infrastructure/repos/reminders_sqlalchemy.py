from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.domain.models.reminder import (
    Reminder,
    ReminderCategory,
    ReminderSeverity,
    ReminderStatus,
)
from rabbitry.infrastructure.db.orm.reminder import ReminderNotifyDateORM, ReminderORM
from rabbitry.utils.datetime_tz import ensure_utc

_SEVERITY_RANK = case(
    {s.value: s.rank for s in ReminderSeverity},
    value=ReminderORM.severity,
    else_=0,
)


class RemindersSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ReminderORM) -> Reminder:
        return Reminder(
            id=orm.id,
            farm_id=orm.farm_id,
            name=orm.name,
            category=ReminderCategory(orm.category),
            severity=ReminderSeverity(orm.severity),
            trigger_at=ensure_utc(orm.trigger_at),
            message=orm.message,
            notify_on=sorted(nd.notify_on for nd in orm.notify_dates),
            status=ReminderStatus(orm.status),
            rabbit_id=orm.rabbit_id,
            hutch_id=orm.hutch_id,
            breeding_event_id=orm.breeding_event_id,
            sent_at=ensure_utc(orm.sent_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _to_orm(self, reminder: Reminder) -> ReminderORM:
        return ReminderORM(
            id=reminder.id,
            farm_id=reminder.farm_id,
            rabbit_id=reminder.rabbit_id,
            hutch_id=reminder.hutch_id,
            breeding_event_id=reminder.breeding_event_id,
            name=reminder.name,
            category=reminder.category.value,
            severity=reminder.severity.value,
            status=reminder.status.value,
            trigger_at=reminder.trigger_at,
            message=reminder.message,
            sent_at=reminder.sent_at,
            created_at=reminder.created_at,
            updated_at=reminder.updated_at,
            notify_dates=[ReminderNotifyDateORM(notify_on=d) for d in reminder.notify_on],
        )

    async def add_many(self, reminders: Iterable[Reminder]) -> list[Reminder]:
        orms = [self._to_orm(r) for r in reminders]
        if not orms:
            return []
        self.session.add_all(orms)
        await self.session.flush()
        return [self._to_domain(orm) for orm in orms]

    async def get(self, farm_id: UUID, reminder_id: UUID) -> Reminder | None:
        stmt = (
            select(ReminderORM)
            .where(ReminderORM.farm_id == farm_id)
            .where(ReminderORM.id == reminder_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        category: str | None = None,
        severity: str | None = None,
        status: str | None = None,
        rabbit_id: UUID | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Reminder]:
        stmt = select(ReminderORM).where(ReminderORM.farm_id == farm_id)
        if category:
            stmt = stmt.where(ReminderORM.category == category)
        if severity:
            stmt = stmt.where(ReminderORM.severity == severity)
        if status:
            stmt = stmt.where(ReminderORM.status == status)
        if rabbit_id:
            stmt = stmt.where(ReminderORM.rabbit_id == rabbit_id)
        stmt = (
            stmt.order_by(_SEVERITY_RANK.desc(), ReminderORM.trigger_at.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_due(self, farm_id: UUID, on_date: date) -> list[Reminder]:
        stmt = (
            select(ReminderORM)
            .join(ReminderNotifyDateORM, ReminderNotifyDateORM.reminder_id == ReminderORM.id)
            .where(ReminderORM.farm_id == farm_id)
            .where(ReminderORM.status == ReminderStatus.PENDING.value)
            .where(ReminderNotifyDateORM.notify_on == on_date)
            .order_by(_SEVERITY_RANK.desc(), ReminderORM.trigger_at.asc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().unique().all()]

    async def list_farms_with_pending(self) -> list[UUID]:
        stmt = (
            select(ReminderORM.farm_id)
            .where(ReminderORM.status == ReminderStatus.PENDING.value)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def exists_for_event(self, breeding_event_id: UUID, name: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(ReminderORM)
            .where(ReminderORM.breeding_event_id == breeding_event_id)
            .where(ReminderORM.name == name)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0) > 0

    async def transition(self, reminder_id: UUID, target: ReminderStatus) -> bool:
        now = datetime.now(timezone.utc)
        values: dict = {"status": target.value, "updated_at": now}
        if target is ReminderStatus.SENT:
            values["sent_at"] = now
        stmt = (
            update(ReminderORM)
            .where(ReminderORM.id == reminder_id)
            .where(ReminderORM.status == ReminderStatus.PENDING.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1

    async def close_pending_for_rabbit(
        self,
        rabbit_id: UUID,
        categories: Iterable[ReminderCategory],
        target: ReminderStatus,
    ) -> int:
        stmt = (
            update(ReminderORM)
            .where(ReminderORM.rabbit_id == rabbit_id)
            .where(ReminderORM.status == ReminderStatus.PENDING.value)
            .where(ReminderORM.category.in_([c.value for c in categories]))
            .values(status=target.value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
