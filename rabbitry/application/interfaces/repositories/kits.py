from __future__ import annotations

from typing import Iterable, Protocol
from uuid import UUID

from rabbitry.domain.models.kit import Kit


class KitsRepository(Protocol):
    async def add_many(self, kits: Iterable[Kit]) -> list[Kit]: ...

    async def count_for_event(self, breeding_event_id: UUID) -> int: ...

    async def find_existing_numbers(self, farm_id: UUID, kit_numbers: list[str]) -> list[str]: ...

    async def list_for_event(self, breeding_event_id: UUID) -> list[Kit]: ...
