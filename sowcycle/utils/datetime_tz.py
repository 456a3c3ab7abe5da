from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sowcycle.application.errors import InvalidDateError

DEFAULT_TIMEZONE_NAME = "Africa/Nairobi"

_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FarmCalendar:
    """Calendar-day arithmetic in UTC plus formatting in the farm's display timezone.

    An instance is built once from settings and handed to every component that needs
    dates, so no timezone configuration lives at module level.
    """

    def __init__(
        self,
        display_timezone: str = DEFAULT_TIMEZONE_NAME,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        try:
            self.display_tz = ZoneInfo(display_timezone)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {display_timezone}") from exc
        self._clock = clock or _utc_now

    def now(self) -> datetime:
        current = self._clock()
        if current.tzinfo is None:
            return current.replace(tzinfo=timezone.utc)
        return current.astimezone(timezone.utc)

    def today(self) -> date:
        return self.now().date()

    def parse_date(self, value: date | datetime | str | None, field: str = "date") -> date:
        """Return the UTC calendar date for `value`.

        Accepts date objects, aware or naive datetimes (naive ones are taken as UTC) and ISO
        strings with an optional trailing 'Z'.
        """
        if value is None:
            raise InvalidDateError(f"Invalid {field}; must be a valid date")
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.date()
            return value.astimezone(timezone.utc).date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise InvalidDateError(f"Invalid {field}; must be a valid date")
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return self.parse_date(datetime.fromisoformat(s), field)
        except ValueError:
            pass
        try:
            return date.fromisoformat(s)
        except ValueError as exc:
            raise InvalidDateError(f"Invalid {field} format; must be a valid date") from exc

    @staticmethod
    def utc_midnight(d: date) -> datetime:
        return datetime.combine(d, time(0, 0), tzinfo=timezone.utc)

    @staticmethod
    def add_days(d: date, days: int) -> date:
        return d + timedelta(days=days)

    def notify_window(self, d: date) -> list[datetime]:
        """Day before and day of `d`, as UTC midnights."""
        return [self.utc_midnight(d - timedelta(days=1)), self.utc_midnight(d)]

    def format_local_date(self, value: date | datetime) -> str:
        """'April 25, 2025' in the display timezone."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            value = value.astimezone(self.display_tz).date()
        return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def as_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from stores without tz support."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
