from __future__ import annotations

import json
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.domain.models.notification import Notification
from rabbitry.infrastructure.db.orm.notification import NotificationORM
from rabbitry.utils.datetime_tz import ensure_utc


class NotificationsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: NotificationORM) -> Notification:
        data = json.loads(orm.data) if orm.data else None
        return Notification(
            id=orm.id,
            farm_id=orm.farm_id,
            type=orm.type,
            title=orm.title,
            message=orm.message,
            priority=orm.priority,
            data=data,
            read=orm.read,
            created_at=ensure_utc(orm.created_at),
            read_at=ensure_utc(orm.read_at),
        )

    def _to_orm(self, notification: Notification) -> NotificationORM:
        data_str = json.dumps(notification.data, default=str) if notification.data else None
        return NotificationORM(
            id=notification.id,
            farm_id=notification.farm_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            priority=notification.priority,
            data=data_str,
            read=notification.read,
            created_at=notification.created_at,
            read_at=notification.read_at,
        )

    async def add(self, notification: Notification) -> Notification:
        orm = self._to_orm(notification)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list_by_farm(
        self,
        farm_id: UUID,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        stmt = (
            select(NotificationORM)
            .where(NotificationORM.farm_id == farm_id)
            .order_by(NotificationORM.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        if unread_only:
            stmt = stmt.where(NotificationORM.read == False)  # noqa: E712

        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def mark_as_read(self, farm_id: UUID, notification_ids: list[UUID]) -> int:
        if not notification_ids:
            return 0
        stmt = (
            update(NotificationORM)
            .where(
                NotificationORM.farm_id == farm_id,
                NotificationORM.id.in_(notification_ids),
                NotificationORM.read == False,  # noqa: E712
            )
            .values(read=True, read_at=func.now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
