from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from rabbitry.application.use_cases.farms import get_farm_settings, update_farm_settings
from rabbitry.config.settings import Settings
from rabbitry.interfaces.http.deps import get_app_settings, get_uow
from rabbitry.interfaces.http.schemas.farm_settings import (
    FarmSettingsResponse,
    FarmSettingsUpdate,
)

router = APIRouter(prefix="/farms/{farm_id}/settings", tags=["settings"])


@router.get("", response_model=FarmSettingsResponse)
async def get_farm_settings_endpoint(
    farm_id: UUID,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    return await get_farm_settings.execute(uow, farm_id, settings.default_timezone)


@router.put("", response_model=FarmSettingsResponse)
async def update_farm_settings_endpoint(
    farm_id: UUID,
    payload: FarmSettingsUpdate,
    uow=Depends(get_uow),
):
    updated = await update_farm_settings.execute(
        uow,
        farm_id,
        update_farm_settings.UpdateFarmSettingsInput(
            timezone=payload.timezone,
            contact_emails=payload.contact_emails,
        ),
    )
    await uow.commit()
    return updated
