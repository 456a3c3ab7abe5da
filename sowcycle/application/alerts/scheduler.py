from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from sowcycle.application.errors import ValidationError
from sowcycle.application.interfaces.unit_of_work import UnitOfWork
from sowcycle.domain.models.alert import Alert, AlertStatus
from sowcycle.domain.models.pen import Pen
from sowcycle.domain.value_objects.breeding_profile import Milestone
from sowcycle.utils.datetime_tz import FarmCalendar

logger = logging.getLogger(__name__)

UNKNOWN_PEN = "unknown"
_TERMINAL_STATUSES = {AlertStatus.COMPLETED.value, AlertStatus.REJECTED.value}


@dataclass(slots=True)
class NewAlert:
    farm_id: UUID
    pig_id: str
    name: str
    alert_type: str
    severity: str
    message: str
    alert_start_date: datetime
    # None means the default day-before/day-of window
    notify_on: list[datetime] | None = None
    pen_id: UUID | None = None
    created_by: UUID | None = None


class AlertScheduler:
    """Materializes milestones as Alert rows and moves pending alerts to terminal states."""

    def __init__(self, uow: UnitOfWork, calendar: FarmCalendar) -> None:
        self.uow = uow
        self.calendar = calendar
        self._pens: dict[UUID, Pen | None] = {}

    async def resolve_pen(self, farm_id: UUID, pig_id: str) -> Pen | None:
        """Current pen of a pig, or None when it cannot be determined."""
        try:
            pig = await self.uow.pigs.get(farm_id, pig_id)
        except Exception as exc:
            logger.warning("Pen lookup failed for pig %s on farm %s: %s", pig_id, farm_id, exc)
            return None
        if pig is None or pig.pen_id is None:
            return None
        return await self._lookup_pen(farm_id, pig.pen_id)

    async def _lookup_pen(self, farm_id: UUID, pen_id: UUID) -> Pen | None:
        if pen_id in self._pens:
            return self._pens[pen_id]
        try:
            pen = await self.uow.pens.get(farm_id, pen_id)
        except Exception as exc:
            logger.warning("Pen lookup failed for pen %s on farm %s: %s", pen_id, farm_id, exc)
            pen = None
        if pen is None:
            logger.warning("Pen %s not found on farm %s; alert keeps no pen", pen_id, farm_id)
        self._pens[pen_id] = pen
        return pen

    @staticmethod
    def pen_label(pen: Pen | None) -> str:
        return pen.name if pen else UNKNOWN_PEN

    async def create_alert(self, new_alert: NewAlert) -> UUID:
        pen_id = None
        if new_alert.pen_id is not None:
            pen = await self._lookup_pen(new_alert.farm_id, new_alert.pen_id)
            pen_id = pen.id if pen else None

        start = self.calendar.utc_midnight(self.calendar.parse_date(new_alert.alert_start_date))
        if new_alert.notify_on is None:
            notify_on = self.calendar.notify_window(start.date())
        else:
            notify_on = [
                self.calendar.utc_midnight(self.calendar.parse_date(d, "notify_on"))
                for d in new_alert.notify_on
            ]
        try:
            alert = Alert.create(
                farm_id=new_alert.farm_id,
                pig_id=new_alert.pig_id,
                pen_id=pen_id,
                name=new_alert.name,
                alert_type=new_alert.alert_type,
                severity=new_alert.severity,
                message=new_alert.message,
                alert_start_date=start,
                notify_on=notify_on,
                created_by=new_alert.created_by,
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        created = await self.uow.alerts.add(alert)
        logger.debug(
            "Alert %s scheduled for pig %s on %s (%s)",
            created.id,
            new_alert.pig_id,
            start.date().isoformat(),
            new_alert.alert_type,
        )
        return created.id

    async def schedule_milestone(
        self,
        *,
        farm_id: UUID,
        sow_id: str,
        pen: Pen | None,
        milestone: Milestone,
        anchor: date,
        created_by: UUID | None = None,
    ) -> UUID:
        due = self.calendar.add_days(anchor, milestone.day_offset)
        values = {
            "sow_id": sow_id,
            "pen": self.pen_label(pen),
            "date": self.calendar.format_local_date(due),
        }
        return await self.create_alert(
            NewAlert(
                farm_id=farm_id,
                pig_id=sow_id,
                pen_id=pen.id if pen else None,
                name=milestone.render_name(**values),
                alert_type=milestone.alert_type,
                severity=milestone.severity,
                message=milestone.render_message(**values),
                alert_start_date=self.calendar.utc_midnight(due),
                created_by=created_by,
            )
        )

    async def cancel_alerts(
        self,
        farm_id: UUID,
        pig_id: str,
        alert_types: Iterable[str],
        target_status: str,
    ) -> int:
        """Move the pig's pending alerts of the given types to a terminal status.

        Alerts already completed or rejected are untouched, so repeating the call is a no-op.
        """
        if target_status not in _TERMINAL_STATUSES:
            raise ValidationError(f"Invalid target status: {target_status}")
        types = sorted(set(alert_types))
        if not types:
            return 0
        changed = await self.uow.alerts.transition_pending(farm_id, pig_id, types, target_status)
        logger.info(
            "Alerts for pig %s moved to %s: %d (%s)",
            pig_id,
            target_status,
            changed,
            ", ".join(types),
        )
        return changed
