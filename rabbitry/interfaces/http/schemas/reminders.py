from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from rabbitry.domain.models.reminder import ReminderCategory, ReminderSeverity, ReminderStatus


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    name: str
    category: ReminderCategory
    severity: ReminderSeverity
    status: ReminderStatus
    trigger_at: datetime
    message: str
    notify_on: list[date]
    rabbit_id: UUID | None
    hutch_id: str | None
    breeding_event_id: UUID | None
    sent_at: datetime | None
    created_at: datetime


class ReminderListResponse(BaseModel):
    items: list[ReminderResponse]
    limit: int
    offset: int


class DueRemindersResponse(BaseModel):
    date: date
    items: list[ReminderResponse]


class DispatchResponse(BaseModel):
    reminder_id: UUID
    outcome: str
