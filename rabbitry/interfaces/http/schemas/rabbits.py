from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class RabbitCreate(BaseModel):
    tag: str
    sex: str  # female | male
    name: str | None = None
    breed: str | None = None
    hutch_id: str | None = None
    birth_date: date | None = None

    @field_validator("tag")
    def strip_tag(cls, v: str) -> str:
        return v.strip()


class RabbitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    tag: str
    sex: str
    name: str | None
    breed: str | None
    hutch_id: str | None
    birth_date: date | None
    is_pregnant: bool
    pregnancy_start_date: date | None
    expected_birth_date: date | None
    last_birth_date: date | None
    total_litters: int
    total_kits: int
    created_at: datetime
    updated_at: datetime
    version: int
