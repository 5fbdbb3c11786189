"""
Canonical clock: one source of «today» for gating decisions.
Days are compared as YYYY-MM-DD strings in the configured timezone.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_day(value: object) -> bool:
    """True for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _DAY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes from the DB are stored in UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class Clock:
    def __init__(self, tz: str | tzinfo = "UTC") -> None:
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def day_of(self, moment: datetime) -> str:
        return as_utc(moment).astimezone(self.tz).date().isoformat()

    def today(self) -> str:
        return self.day_of(self.now())


class FixedClock(Clock):
    """Clock pinned to a moment; today() is that moment's day in tz."""

    def __init__(self, moment: datetime | str, tz: str | tzinfo = "UTC") -> None:
        super().__init__(tz)
        if isinstance(moment, str):
            # "2024-01-03" -> полдень этого дня в tz
            moment = datetime.fromisoformat(moment).replace(hour=12, tzinfo=self.tz)
        self.moment = as_utc(moment).astimezone(timezone.utc)

    def now(self) -> datetime:
        return self.moment
