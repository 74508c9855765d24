from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.breeding_event import BreedingEvent


class BreedingEventsRepository(Protocol):
    async def add(self, event: BreedingEvent) -> BreedingEvent:
        """Insert an event; raises ConflictError if the doe already has an open one."""
        ...

    async def update(self, event: BreedingEvent, expected_version: int) -> BreedingEvent:
        """Persist `event` if the stored version still equals `expected_version`.

        Raises ConflictError when another writer got there first.
        """
        ...

    async def get(self, farm_id: UUID, event_id: UUID) -> BreedingEvent | None: ...

    async def get_open_for_doe(self, farm_id: UUID, doe_id: UUID) -> BreedingEvent | None: ...

    async def list_buck_matings(
        self,
        farm_id: UUID,
        buck_id: UUID,
        date_from: date,
        date_to: date,
    ) -> list[BreedingEvent]: ...

    async def get_latest_completed(self, farm_id: UUID, doe_id: UUID) -> BreedingEvent | None: ...

    async def list_recent_completed(
        self,
        farm_id: UUID,
        doe_id: UUID,
        limit: int = 3,
    ) -> list[BreedingEvent]: ...

    async def list(
        self,
        farm_id: UUID,
        doe_id: UUID | None = None,
        open_only: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[BreedingEvent]: ...
