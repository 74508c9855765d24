from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol
from uuid import UUID

from rabbitry.domain.models.reminder import Reminder, ReminderCategory, ReminderStatus


class RemindersRepository(Protocol):
    async def add_many(self, reminders: Iterable[Reminder]) -> list[Reminder]: ...

    async def get(self, farm_id: UUID, reminder_id: UUID) -> Reminder | None: ...

    async def list(
        self,
        farm_id: UUID,
        category: str | None = None,
        severity: str | None = None,
        status: str | None = None,
        rabbit_id: UUID | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Reminder]: ...

    async def list_due(self, farm_id: UUID, on_date: date) -> list[Reminder]:
        """Pending reminders whose notify-on set contains `on_date`."""
        ...

    async def list_farms_with_pending(self) -> list[UUID]: ...

    async def exists_for_event(self, breeding_event_id: UUID, name: str) -> bool: ...

    async def transition(
        self,
        reminder_id: UUID,
        target: ReminderStatus,
    ) -> bool:
        """Conditionally move a pending reminder to `target`.

        Returns False when the reminder is no longer pending.
        """
        ...

    async def close_pending_for_rabbit(
        self,
        rabbit_id: UUID,
        categories: Iterable[ReminderCategory],
        target: ReminderStatus,
    ) -> int: ...
