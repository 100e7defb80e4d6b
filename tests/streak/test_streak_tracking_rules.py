from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from flashdeck.streak.rules import (
    break_streak,
    classify_streak_status,
    expire_if_broken,
    hours_remaining,
    record_study,
    studied_today,
)
from flashdeck.streak.time import local_date
from flashdeck.streak.types import StreakSnapshot, StreakStatus

UTC = timezone.utc


def snapshot(
    *,
    current_streak: int = 0,
    longest_streak: int = 0,
    last_study_at: datetime | None = None,
    streak_started_at: datetime | None = None,
) -> StreakSnapshot:
    return StreakSnapshot(
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_study_at=last_study_at,
        streak_started_at=streak_started_at,
        updated_at=datetime(2026, 2, 1, 0, 0, tzinfo=UTC),
    )


def test_hours_remaining_without_study_is_zero() -> None:
    assert hours_remaining(snapshot(), now_utc=datetime(2026, 2, 18, 12, 0, tzinfo=UTC)) == 0.0


def test_hours_remaining_counts_down_grace_window() -> None:
    last = datetime(2026, 2, 18, 12, 0, tzinfo=UTC)
    state = snapshot(current_streak=2, longest_streak=2, last_study_at=last)

    assert hours_remaining(state, now_utc=last + timedelta(hours=10)) == 38.0
    assert hours_remaining(state, now_utc=last + timedelta(hours=60)) == 0.0


def test_status_transitions_over_grace_window() -> None:
    last = datetime(2026, 2, 18, 12, 0, tzinfo=UTC)
    state = snapshot(current_streak=2, longest_streak=2, last_study_at=last)

    assert classify_streak_status(state, now_utc=last + timedelta(hours=1)) == StreakStatus.ACTIVE
    assert classify_streak_status(state, now_utc=last + timedelta(hours=24)) == StreakStatus.AT_RISK
    assert classify_streak_status(state, now_utc=last + timedelta(hours=48)) == StreakStatus.BROKEN
    assert classify_streak_status(snapshot(), now_utc=last) == StreakStatus.BROKEN


def test_custom_grace_window_is_respected() -> None:
    last = datetime(2026, 2, 18, 12, 0, tzinfo=UTC)
    state = snapshot(current_streak=2, longest_streak=2, last_study_at=last)

    status = classify_streak_status(
        state,
        now_utc=last + timedelta(hours=30),
        grace_hours=72,
        at_risk_hours=12,
    )

    assert status == StreakStatus.ACTIVE


def test_studied_today_uses_configured_timezone() -> None:
    last = datetime(2026, 2, 18, 22, 30, tzinfo=UTC)
    state = snapshot(current_streak=1, longest_streak=1, last_study_at=last)
    now_utc = datetime(2026, 2, 18, 23, 30, tzinfo=UTC)

    assert studied_today(state, now_utc=now_utc, timezone_name="UTC") is True
    # 22:30 UTC is Feb 18 in Berlin while 23:30 UTC is already Feb 19 there.
    assert studied_today(state, now_utc=now_utc, timezone_name="Europe/Berlin") is False


def test_first_study_starts_streak() -> None:
    now_utc = datetime(2026, 2, 18, 9, 0, tzinfo=UTC)

    state_after, counted = record_study(snapshot(), now_utc=now_utc)

    assert counted is True
    assert state_after.current_streak == 1
    assert state_after.longest_streak == 1
    assert state_after.streak_started_at == now_utc
    assert state_after.last_study_at == now_utc


def test_same_day_study_is_not_counted_twice() -> None:
    first = datetime(2026, 2, 18, 9, 0, tzinfo=UTC)
    state = snapshot(current_streak=4, longest_streak=6, last_study_at=first, streak_started_at=first)

    state_after, counted = record_study(state, now_utc=first + timedelta(hours=3))

    assert counted is False
    assert state_after.current_streak == 4
    assert state_after.last_study_at == first + timedelta(hours=3)


def test_next_day_study_extends_streak_and_record() -> None:
    first = datetime(2026, 2, 18, 9, 0, tzinfo=UTC)
    state = snapshot(current_streak=6, longest_streak=6, last_study_at=first, streak_started_at=first)

    state_after, counted = record_study(state, now_utc=first + timedelta(days=1))

    assert counted is True
    assert state_after.current_streak == 7
    assert state_after.longest_streak == 7
    assert state_after.streak_started_at == first


def test_study_after_broken_window_restarts_at_one() -> None:
    first = datetime(2026, 2, 10, 9, 0, tzinfo=UTC)
    state = snapshot(current_streak=5, longest_streak=9, last_study_at=first, streak_started_at=first)
    now_utc = first + timedelta(days=3)

    state_after, counted = record_study(state, now_utc=now_utc)

    assert counted is True
    assert state_after.current_streak == 1
    assert state_after.longest_streak == 9
    assert state_after.streak_started_at == now_utc


def test_break_streak_emits_past_streak() -> None:
    started = datetime(2026, 2, 10, 9, 0, tzinfo=UTC)
    last = datetime(2026, 2, 14, 20, 0, tzinfo=UTC)
    state = snapshot(current_streak=5, longest_streak=9, last_study_at=last, streak_started_at=started)

    state_after, past = break_streak(state)

    assert past is not None
    assert past.streak_length == 5
    assert past.start_date == date(2026, 2, 10)
    assert past.end_date == date(2026, 2, 14)
    assert state_after.current_streak == 0
    assert state_after.longest_streak == 9
    assert state_after.streak_started_at is None


def test_break_streak_at_zero_is_noop() -> None:
    state = snapshot(longest_streak=3)

    state_after, past = break_streak(state)

    assert past is None
    assert state_after is state


def test_expire_if_broken_only_breaks_expired_streaks() -> None:
    last = datetime(2026, 2, 14, 20, 0, tzinfo=UTC)
    state = snapshot(current_streak=3, longest_streak=3, last_study_at=last, streak_started_at=last)

    kept, kept_past = expire_if_broken(state, now_utc=last + timedelta(hours=47))
    expired, expired_past = expire_if_broken(state, now_utc=last + timedelta(hours=49))

    assert kept_past is None
    assert kept.current_streak == 3
    assert expired_past is not None
    assert expired_past.streak_length == 3
    assert expired.current_streak == 0


def test_local_date_helper_handles_timezones() -> None:
    moment = datetime(2026, 3, 28, 23, 30, tzinfo=UTC)

    assert local_date(moment) == date(2026, 3, 28)
    assert local_date(moment, "Europe/Berlin") == date(2026, 3, 29)
