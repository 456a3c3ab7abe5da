from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Notification:
    id: UUID
    farm_id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    data: dict | None = None
    priority: str = "medium"
    read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: datetime | None = None

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        user_id: UUID,
        type: str,
        title: str,
        message: str,
        data: dict | None = None,
        priority: str = "medium",
    ) -> Notification:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=data,
            priority=priority,
            read=False,
            created_at=datetime.now(timezone.utc),
            read_at=None,
        )
