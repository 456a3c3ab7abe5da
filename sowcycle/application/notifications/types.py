from __future__ import annotations


class NotificationType:
    """Canonical notification type names used across backend/frontend."""

    CULLING_ALERT = "culling_alert"


class NotificationPriority:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

