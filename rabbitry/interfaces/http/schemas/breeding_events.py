from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rabbitry.interfaces.http.schemas.reminders import ReminderResponse


class BreedingEventCreate(BaseModel):
    doe_id: UUID
    buck_id: UUID
    mating_date: date
    notes: str | None = None


class BirthRecordCreate(BaseModel):
    actual_birth_date: date
    litter_size: int = Field(ge=0)
    notes: str | None = None


class KitCreate(BaseModel):
    kit_number: str
    sex: str | None = None
    color: str | None = None
    birth_weight: Decimal | None = None
    notes: str | None = None


class KitsCreate(BaseModel):
    kits: list[KitCreate]


class KitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    breeding_event_id: UUID
    kit_number: str
    sex: str | None
    color: str | None
    birth_weight: Decimal | None
    status: str
    weaning_date: date | None
    notes: str | None


class BreedingEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    doe_id: UUID
    buck_id: UUID
    mating_date: date
    expected_birth_date: date
    actual_birth_date: date | None
    litter_size: int | None
    weaning_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    version: int


class BreedingEventDetailResponse(BreedingEventResponse):
    kits: list[KitResponse] = []


class BreedingEventListResponse(BaseModel):
    items: list[BreedingEventResponse]
    limit: int
    offset: int


class ProposeMatingResponse(BaseModel):
    breeding_event: BreedingEventResponse
    reminders: list[ReminderResponse]


class CullingResponse(BaseModel):
    recommend: bool
    reasons: list[str]


class RecordBirthResponse(BaseModel):
    breeding_event: BreedingEventResponse
    reminders: list[ReminderResponse]
    completed_reminders: int
    culling: CullingResponse


class RetractMatingResponse(BaseModel):
    breeding_event_id: UUID
    rejected_reminders: int


class RecordKitsResponse(BaseModel):
    kits: list[KitResponse]
    reminder: ReminderResponse | None = None
