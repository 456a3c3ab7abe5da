from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sowcycle.interfaces.http.schemas.piglets import PigletResponse


class BreedingRecordCreate(BaseModel):
    sow_id: str = Field(min_length=1)
    boar_id: str = Field(min_length=1)
    # Dates stay strings here; the farm calendar parses them and reports bad values
    mating_date: str
    expected_birth_date: str | None = None
    notes: str | None = None
    immediate_notify_date: str | None = None
    alert_message: str | None = None


class BirthOutcomeInput(BaseModel):
    actual_birth_date: str
    number_of_piglets: int
    notes: str | None = None


class BreedingRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    sow_id: str
    boar_id: str
    mating_date: date
    expected_birth_date: date
    alert_date: date
    actual_birth_date: date | None
    number_of_piglets: int | None
    notes: str | None
    created_by: UUID | None
    updated_by: UUID | None
    created_at: datetime
    updated_at: datetime
    version: int


class BreedingRecordSummaryResponse(BreedingRecordResponse):
    state: str
    is_overdue: bool
    piglet_count: int


class BreedingRecordListResponse(BaseModel):
    items: list[BreedingRecordSummaryResponse]
    total: int
    limit: int
    offset: int


class BreedingRecordDetailResponse(BreedingRecordResponse):
    state: str
    piglets: list[PigletResponse] = []


class DeleteBreedingRecordResponse(BaseModel):
    id: UUID
