from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import NotificationPriority, NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    data: dict[str, Any]
    priority: str = NotificationPriority.MEDIUM


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """
    Central place to build notification title/message/data from templates.
    Keep strings easy to find and translate.
    """
    if ntype == NotificationType.CULLING_ALERT:
        sow_id: str = kwargs["sow_id"]
        farm_id = kwargs.get("farm_id")
        reason = kwargs.get("reason")
        breeding_record_id = kwargs.get("breeding_record_id")
        message: str = kwargs.get("message") or f"Sow {sow_id} recommended for culling."
        data = {
            "sow_id": sow_id,
            "farm_id": str(farm_id) if farm_id is not None else None,
            "reason": getattr(reason, "value", reason),
            "breeding_record_id": (
                str(breeding_record_id) if breeding_record_id is not None else None
            ),
            "litter_size": kwargs.get("litter_size"),
            "litter_history": list(kwargs.get("litter_history") or []),
        }
        return BuiltNotification(
            ntype,
            "Sow Culling Alert",
            message,
            data,
            priority=NotificationPriority.HIGH,
        )

    raise ValueError(f"Unknown notification type: {ntype}")
