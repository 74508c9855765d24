from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.rabbit import Rabbit


class RabbitsRepository(Protocol):
    async def add(self, rabbit: Rabbit) -> Rabbit: ...

    async def get(self, farm_id: UUID, rabbit_id: UUID) -> Rabbit | None: ...

    async def update(self, rabbit: Rabbit) -> Rabbit: ...

    async def list(
        self,
        farm_id: UUID,
        sex: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Rabbit]: ...
