from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr


class FarmSettingsUpdate(BaseModel):
    timezone: str | None = None
    contact_emails: list[EmailStr] = []


class FarmSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    farm_id: UUID
    timezone: str | None
    contact_emails: list[str]
