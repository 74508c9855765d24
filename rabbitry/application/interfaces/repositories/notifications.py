from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.notification import Notification


class NotificationsRepository(Protocol):
    async def add(self, notification: Notification) -> Notification: ...

    async def list_by_farm(
        self,
        farm_id: UUID,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]: ...

    async def mark_as_read(self, farm_id: UUID, notification_ids: list[UUID]) -> int: ...
