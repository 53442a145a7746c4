from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from todoapp.ports import Clock


class SystemClock(Clock):
    """Wall clock in the user's timezone; 'today' is the local calendar date."""

    def __init__(self, tz_name: str = "UTC") -> None:
        self._tz_name = tz_name
        self._tz = ZoneInfo(tz_name)

    @property
    def tz_name(self) -> str:
        return self._tz_name

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        return self.now().date()
