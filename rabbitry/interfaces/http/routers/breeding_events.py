from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from rabbitry.application.events.dispatcher import dispatch_events
from rabbitry.application.use_cases.breeding import (
    get_breeding_event,
    list_breeding_events,
    propose_mating,
    record_birth,
    record_kits,
    retract_mating,
)
from rabbitry.config.settings import Settings
from rabbitry.interfaces.http.deps import get_app_settings, get_uow
from rabbitry.interfaces.http.schemas.breeding_events import (
    BirthRecordCreate,
    BreedingEventCreate,
    BreedingEventDetailResponse,
    BreedingEventListResponse,
    BreedingEventResponse,
    CullingResponse,
    KitResponse,
    KitsCreate,
    ProposeMatingResponse,
    RecordBirthResponse,
    RecordKitsResponse,
    RetractMatingResponse,
)

router = APIRouter(prefix="/farms/{farm_id}/breeding-events", tags=["breeding"])


def _schedule_events(request: Request, background_tasks: BackgroundTasks, uow) -> None:
    # Dispatch notifications in background (post-commit)
    events = uow.drain_events()
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory and events:
        background_tasks.add_task(dispatch_events, session_factory, events)


@router.post("", response_model=ProposeMatingResponse, status_code=status.HTTP_201_CREATED)
async def propose_mating_endpoint(
    farm_id: UUID,
    payload: BreedingEventCreate,
    background_tasks: BackgroundTasks,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    input_data = propose_mating.ProposeMatingInput(
        doe_id=payload.doe_id,
        buck_id=payload.buck_id,
        mating_date=payload.mating_date,
        notes=payload.notes,
    )
    result = await propose_mating.execute(
        uow,
        farm_id,
        input_data,
        gestation_days=settings.gestation_days,
        default_timezone=settings.default_timezone,
    )
    await uow.commit()
    _schedule_events(request, background_tasks, uow)
    return {"breeding_event": result.breeding_event, "reminders": result.reminders}


@router.get("", response_model=BreedingEventListResponse)
async def list_breeding_events_endpoint(
    farm_id: UUID,
    doe_id: UUID | None = None,
    open_only: bool = False,
    limit: int = 50,
    offset: int = 0,
    uow=Depends(get_uow),
):
    items = await list_breeding_events.execute(
        uow, farm_id, doe_id=doe_id, open_only=open_only, limit=limit, offset=offset
    )
    return {"items": items, "limit": limit, "offset": offset}


@router.get("/{breeding_event_id}", response_model=BreedingEventDetailResponse)
async def get_breeding_event_endpoint(
    farm_id: UUID,
    breeding_event_id: UUID,
    uow=Depends(get_uow),
):
    detail = await get_breeding_event.execute(uow, farm_id, breeding_event_id)
    data = BreedingEventResponse.model_validate(detail.breeding_event).model_dump()
    return BreedingEventDetailResponse(
        **data, kits=[KitResponse.model_validate(kit) for kit in detail.kits]
    )


@router.post("/{breeding_event_id}/birth", response_model=RecordBirthResponse)
async def record_birth_endpoint(
    farm_id: UUID,
    breeding_event_id: UUID,
    payload: BirthRecordCreate,
    background_tasks: BackgroundTasks,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    input_data = record_birth.RecordBirthInput(
        actual_birth_date=payload.actual_birth_date,
        litter_size=payload.litter_size,
        notes=payload.notes,
    )
    result = await record_birth.execute(
        uow,
        farm_id,
        breeding_event_id,
        input_data,
        default_timezone=settings.default_timezone,
    )
    await uow.commit()
    _schedule_events(request, background_tasks, uow)
    return {
        "breeding_event": result.breeding_event,
        "reminders": result.reminders,
        "completed_reminders": result.completed_reminders,
        "culling": CullingResponse(
            recommend=result.culling.recommend,
            reasons=[r.value for r in result.culling.reasons],
        ),
    }


@router.post(
    "/{breeding_event_id}/kits",
    response_model=RecordKitsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_kits_endpoint(
    farm_id: UUID,
    breeding_event_id: UUID,
    payload: KitsCreate,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    kits = [
        record_kits.KitInput(
            kit_number=k.kit_number,
            sex=k.sex,
            color=k.color,
            birth_weight=k.birth_weight,
            notes=k.notes,
        )
        for k in payload.kits
    ]
    result = await record_kits.execute(
        uow, farm_id, breeding_event_id, kits, default_timezone=settings.default_timezone
    )
    await uow.commit()
    return {"kits": result.kits, "reminder": result.reminder}


@router.delete("/{breeding_event_id}", response_model=RetractMatingResponse)
async def retract_mating_endpoint(
    farm_id: UUID,
    breeding_event_id: UUID,
    uow=Depends(get_uow),
):
    result = await retract_mating.execute(uow, farm_id, breeding_event_id)
    await uow.commit()
    return {
        "breeding_event_id": result.breeding_event.id,
        "rejected_reminders": result.rejected_reminders,
    }
