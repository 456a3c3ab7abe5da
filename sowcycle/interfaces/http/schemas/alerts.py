from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    pig_id: str
    pen_id: UUID | None
    name: str
    alert_type: str
    severity: str
    message: str
    status: str
    alert_start_date: datetime
    notify_on: list[datetime]
    created_by: UUID | None
    created_at: datetime


class AlertListResponse(BaseModel):
    items: list[AlertResponse]
    total: int
