"""
Source of the current time.

All notions of "today" (the past-date check, the upcoming listing and
today's host) go through a ``Clock`` bound to a single IANA timezone,
configured via ``APP_TIMEZONE``.  Tests substitute a clock that always
returns the same instant.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigurationError


class Clock:
    """Wall clock in a fixed timezone."""

    def __init__(self, timezone_name: str = "UTC"):
        try:
            self.tz = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone {timezone_name!r}") from exc
        self.timezone_name = timezone_name

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        """Calendar date in the configured timezone."""
        return self.now().date()
