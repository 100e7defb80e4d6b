from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

from flashdeck.streak.constants import DEFAULT_AT_RISK_HOURS, DEFAULT_GRACE_HOURS, DEFAULT_TIMEZONE
from flashdeck.streak.time import local_date
from flashdeck.streak.types import PastStreak, StreakSnapshot, StreakStatus

SECONDS_PER_HOUR = 3600


def _local_date_or_none(value: datetime | None, timezone_name: str) -> date | None:
    if value is None:
        return None
    return local_date(value, timezone_name)


def hours_remaining(
    snapshot: StreakSnapshot,
    *,
    now_utc: datetime,
    grace_hours: int = DEFAULT_GRACE_HOURS,
) -> float:
    if snapshot.last_study_at is None:
        return 0.0
    deadline = snapshot.last_study_at + timedelta(hours=grace_hours)
    return max(0.0, (deadline - now_utc).total_seconds() / SECONDS_PER_HOUR)


def classify_streak_status(
    snapshot: StreakSnapshot,
    *,
    now_utc: datetime,
    grace_hours: int = DEFAULT_GRACE_HOURS,
    at_risk_hours: int = DEFAULT_AT_RISK_HOURS,
) -> StreakStatus:
    remaining = hours_remaining(snapshot, now_utc=now_utc, grace_hours=grace_hours)
    if remaining <= 0:
        return StreakStatus.BROKEN
    if remaining <= at_risk_hours:
        return StreakStatus.AT_RISK
    return StreakStatus.ACTIVE


def studied_today(
    snapshot: StreakSnapshot,
    *,
    now_utc: datetime,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> bool:
    if snapshot.last_study_at is None:
        return False
    return local_date(snapshot.last_study_at, timezone_name) == local_date(now_utc, timezone_name)


def break_streak(
    snapshot: StreakSnapshot,
    *,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> tuple[StreakSnapshot, PastStreak | None]:
    if snapshot.current_streak <= 0:
        return snapshot, None

    past = PastStreak(
        streak_length=snapshot.current_streak,
        start_date=_local_date_or_none(snapshot.streak_started_at, timezone_name),
        end_date=_local_date_or_none(snapshot.last_study_at, timezone_name),
    )
    return replace(snapshot, current_streak=0, streak_started_at=None), past


def expire_if_broken(
    snapshot: StreakSnapshot,
    *,
    now_utc: datetime,
    grace_hours: int = DEFAULT_GRACE_HOURS,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> tuple[StreakSnapshot, PastStreak | None]:
    if snapshot.current_streak <= 0:
        return snapshot, None
    status = classify_streak_status(snapshot, now_utc=now_utc, grace_hours=grace_hours)
    if status != StreakStatus.BROKEN:
        return snapshot, None
    return break_streak(snapshot, timezone_name=timezone_name)


def record_study(
    snapshot: StreakSnapshot,
    *,
    now_utc: datetime,
    grace_hours: int = DEFAULT_GRACE_HOURS,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> tuple[StreakSnapshot, bool]:
    if studied_today(snapshot, now_utc=now_utc, timezone_name=timezone_name):
        return replace(snapshot, last_study_at=now_utc), False

    status = classify_streak_status(snapshot, now_utc=now_utc, grace_hours=grace_hours)
    if status == StreakStatus.BROKEN or snapshot.current_streak <= 0:
        updated = replace(
            snapshot,
            current_streak=1,
            longest_streak=max(snapshot.longest_streak, 1),
            last_study_at=now_utc,
            streak_started_at=now_utc,
        )
        return updated, True

    current_streak = snapshot.current_streak + 1
    updated = replace(
        snapshot,
        current_streak=current_streak,
        longest_streak=max(snapshot.longest_streak, current_streak),
        last_study_at=now_utc,
    )
    return updated, True
