from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.rabbit import Rabbit, Sex


@dataclass(slots=True)
class CreateRabbitInput:
    tag: str
    sex: str
    name: str | None = None
    breed: str | None = None
    hutch_id: str | None = None
    birth_date: date | None = None


async def execute(uow: UnitOfWork, farm_id: UUID, payload: CreateRabbitInput) -> Rabbit:
    tag = (payload.tag or "").strip()
    if not tag:
        raise ValidationError("Tag is required")
    valid_sexes = {s.value for s in Sex}
    sex = (payload.sex or "").lower()
    if sex not in valid_sexes:
        raise ValidationError(f"Invalid sex. Must be one of: {', '.join(sorted(valid_sexes))}")
    rabbit = Rabbit.create(
        farm_id=farm_id,
        tag=tag,
        sex=sex,
        name=payload.name,
        breed=payload.breed,
        hutch_id=payload.hutch_id,
        birth_date=payload.birth_date,
    )
    return await uow.rabbits.add(rabbit)
