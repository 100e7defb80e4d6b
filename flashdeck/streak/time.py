from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flashdeck.streak.constants import DEFAULT_TIMEZONE


def local_date(now_utc: datetime, timezone_name: str = DEFAULT_TIMEZONE) -> date:
    """Converts an aware UTC datetime to the calendar date in `timezone_name`."""
    return now_utc.astimezone(ZoneInfo(timezone_name)).date()
