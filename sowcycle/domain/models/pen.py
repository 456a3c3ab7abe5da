from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(slots=True)
class Pen:
    id: UUID
    farm_id: UUID
    name: str
