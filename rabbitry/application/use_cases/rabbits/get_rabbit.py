from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.rabbit import Rabbit


async def execute(uow: UnitOfWork, farm_id: UUID, rabbit_id: UUID) -> Rabbit:
    rabbit = await uow.rabbits.get(farm_id, rabbit_id)
    if rabbit is None:
        raise NotFound(f"Rabbit {rabbit_id} not found")
    return rabbit
