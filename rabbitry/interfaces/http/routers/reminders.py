from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from rabbitry.application.errors import TransientDispatchFailure
from rabbitry.application.use_cases.farms.get_farm_settings import resolve_farm_timezone
from rabbitry.application.use_cases.reminders import (
    complete_reminder,
    dispatch_reminder,
    list_due_reminders,
    list_reminders,
)
from rabbitry.application.use_cases.reminders.dispatch_reminder import DispatchOutcome
from rabbitry.config.settings import Settings
from rabbitry.interfaces.http.deps import get_app_settings, get_reminder_notifier, get_uow
from rabbitry.interfaces.http.schemas.reminders import (
    DispatchResponse,
    DueRemindersResponse,
    ReminderListResponse,
    ReminderResponse,
)
from rabbitry.utils.datetime_tz import local_today

router = APIRouter(prefix="/farms/{farm_id}/reminders", tags=["reminders"])


@router.get("", response_model=ReminderListResponse)
async def list_reminders_endpoint(
    farm_id: UUID,
    category: str | None = None,
    severity: str | None = None,
    status: str | None = None,
    rabbit_id: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
    uow=Depends(get_uow),
):
    items = await list_reminders.execute(
        uow,
        farm_id,
        category=category,
        severity=severity,
        status=status,
        rabbit_id=rabbit_id,
        limit=limit,
        offset=offset,
    )
    return {"items": items, "limit": limit, "offset": offset}


@router.get("/due", response_model=DueRemindersResponse)
async def due_reminders_endpoint(
    farm_id: UUID,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    tz = await resolve_farm_timezone(uow, farm_id, settings.default_timezone)
    items = await list_due_reminders.execute(
        uow, farm_id, default_timezone=settings.default_timezone
    )
    return {"date": local_today(tz), "items": items}


@router.post("/{reminder_id}/dispatch", response_model=DispatchResponse)
async def dispatch_reminder_endpoint(
    farm_id: UUID,
    reminder_id: UUID,
    settings: Settings = Depends(get_app_settings),
    notifier=Depends(get_reminder_notifier),
    uow=Depends(get_uow),
):
    outcome = await dispatch_reminder.execute(
        uow,
        farm_id,
        reminder_id,
        notifier,
        fallback_recipients=settings.email_admin_recipients_list,
    )
    if outcome is DispatchOutcome.TRANSIENT_FAILURE:
        raise TransientDispatchFailure(
            f"Reminder {reminder_id} could not be delivered; it stays pending",
            details={"reminder_id": str(reminder_id)},
        )
    return {"reminder_id": reminder_id, "outcome": outcome.value}


@router.post("/{reminder_id}/complete", response_model=ReminderResponse)
async def complete_reminder_endpoint(farm_id: UUID, reminder_id: UUID, uow=Depends(get_uow)):
    reminder = await complete_reminder.execute(uow, farm_id, reminder_id)
    await uow.commit()
    return reminder
