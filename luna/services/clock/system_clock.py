# luna/services/clock/system_clock.py
from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from luna.common.settings import get_settings


class SystemClock:
    """ClockPort backed by the wall clock, in the configured timezone."""

    def __init__(self, tz: str | None = None) -> None:
        self.tz = ZoneInfo(tz or get_settings().tz)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock:
    """ClockPort that always returns the same day."""

    def __init__(self, day: date) -> None:
        self.day = day

    def today(self) -> date:
        return self.day
