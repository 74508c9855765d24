from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.farm_settings import FarmSettings


class FarmSettingsRepository(Protocol):
    async def get(self, farm_id: UUID) -> FarmSettings | None: ...

    async def upsert(self, settings: FarmSettings) -> FarmSettings: ...
