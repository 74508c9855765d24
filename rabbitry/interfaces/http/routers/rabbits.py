from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from rabbitry.application.use_cases.rabbits import create_rabbit, get_rabbit
from rabbitry.interfaces.http.deps import get_uow
from rabbitry.interfaces.http.schemas.rabbits import RabbitCreate, RabbitResponse

router = APIRouter(prefix="/farms/{farm_id}/rabbits", tags=["rabbits"])


@router.post("", response_model=RabbitResponse, status_code=status.HTTP_201_CREATED)
async def create_rabbit_endpoint(farm_id: UUID, payload: RabbitCreate, uow=Depends(get_uow)):
    rabbit = await create_rabbit.execute(
        uow,
        farm_id,
        create_rabbit.CreateRabbitInput(
            tag=payload.tag,
            sex=payload.sex,
            name=payload.name,
            breed=payload.breed,
            hutch_id=payload.hutch_id,
            birth_date=payload.birth_date,
        ),
    )
    await uow.commit()
    return rabbit


@router.get("/{rabbit_id}", response_model=RabbitResponse)
async def get_rabbit_endpoint(farm_id: UUID, rabbit_id: UUID, uow=Depends(get_uow)):
    return await get_rabbit.execute(uow, farm_id, rabbit_id)
