from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PigletCreate(BaseModel):
    piglet_number: str
    breeding_record_id: UUID | None = None
    birth_weight: Decimal | None = None
    gender: str | None = None
    color: str | None = None
    status: str | None = None
    parent_male_id: str | None = None
    parent_female_id: str | None = None
    notes: str | None = None


class RegisterLitterRequest(BaseModel):
    piglets: list[PigletCreate] = Field(default_factory=list)


class PigletUpdate(BaseModel):
    weaning_weight: Decimal | None = None
    status: str | None = None
    notes: str | None = None
    parent_male_id: str | None = None
    parent_female_id: str | None = None
    birth_weight: Decimal | None = None
    gender: str | None = None
    color: str | None = None


class PigletResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    breeding_record_id: UUID
    farm_id: UUID
    piglet_number: str
    birth_weight: Decimal | None
    gender: str | None
    color: str | None
    status: str
    weaning_date: date | None
    weaning_weight: Decimal | None
    parent_male_id: str | None
    parent_female_id: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class RegisterLitterResponse(BaseModel):
    success: bool
    registered_count: int = 0
    data: list[PigletResponse] = []
    warnings: list[str] = []
    message: str | None = None


class PigletUpdateResponse(BaseModel):
    piglet: PigletResponse
    warnings: list[str] = []
