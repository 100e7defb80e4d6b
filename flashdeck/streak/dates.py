from __future__ import annotations

from datetime import date, datetime

from flashdeck.streak.constants import MONTH_ABBREVIATIONS, UNKNOWN_DATE_LABEL

DateLike = date | datetime | str | None


def _coerce_date(value: DateLike) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            # fromisoformat before 3.11 rejects the trailing "Z"
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def format_date(value: DateLike, *, today: date) -> str:
    """Renders a date as "Mar 15", adding the year when it is not `today`'s year.

    Absent or unparseable input yields "Unknown" instead of raising.
    """
    parsed = _coerce_date(value)
    if parsed is None:
        return UNKNOWN_DATE_LABEL

    label = f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.day}"
    if parsed.year != today.year:
        label = f"{label}, {parsed.year}"
    return label


def format_date_range(start: DateLike, end: DateLike, *, today: date) -> str:
    return f"{format_date(start, today=today)} - {format_date(end, today=today)}"
