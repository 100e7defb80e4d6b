from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from flashdeck.streak import service as streak_service
from flashdeck.streak.errors import GallerySelectionError
from flashdeck.streak.service import StreakService
from flashdeck.streak.types import MessageVariant, StreakPolicy, StreakStatus

UTC = timezone.utc
POLICY = StreakPolicy(grace_hours=48, at_risk_hours=24, timezone_name="UTC", past_streaks_limit=10)


class _FakeSession:
    def __init__(self) -> None:
        self.flushes = 0

    async def flush(self) -> None:
        self.flushes += 1


def _state(
    *,
    user_id: int = 42,
    current_streak: int = 0,
    longest_streak: int = 0,
    last_study_at: datetime | None = None,
    streak_started_at: datetime | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        user_id=user_id,
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_study_at=last_study_at,
        streak_started_at=streak_started_at,
        version=0,
        updated_at=datetime(2026, 2, 1, tzinfo=UTC),
    )


def _patch_state(monkeypatch, state: SimpleNamespace | None) -> dict[str, list]:
    calls: dict[str, list] = {"created": [], "touched": [], "past": []}

    async def _fake_get_for_update(session, user_id: int):
        return state

    async def _fake_touch(session, *, user_id: int, now_utc: datetime):
        calls["touched"].append(user_id)
        return SimpleNamespace(id=user_id)

    async def _fake_create_default(session, *, user_id: int, now_utc: datetime):
        created = _state(user_id=user_id)
        calls["created"].append(created)
        return created

    async def _fake_add_past(session, **kwargs):
        calls["past"].append(kwargs)
        return SimpleNamespace(**kwargs)

    monkeypatch.setattr(streak_service.StreakRepo, "get_by_user_id_for_update", _fake_get_for_update)
    monkeypatch.setattr(streak_service.UsersRepo, "touch_or_create", _fake_touch)
    monkeypatch.setattr(streak_service.StreakRepo, "create_default_state", _fake_create_default)
    monkeypatch.setattr(streak_service.StreakRepo, "add_past_streak", _fake_add_past)
    return calls


@pytest.mark.asyncio
async def test_record_study_creates_state_for_new_user(monkeypatch) -> None:
    calls = _patch_state(monkeypatch, None)
    now_utc = datetime(2026, 2, 18, 9, 0, tzinfo=UTC)

    result = await StreakService.record_study(_FakeSession(), user_id=42, now_utc=now_utc, policy=POLICY)

    assert calls["touched"] == [42]
    assert len(calls["created"]) == 1
    assert result.counted_for_streak is True
    assert result.current_streak == 1
    assert result.longest_streak == 1
    assert result.status == StreakStatus.ACTIVE
    assert result.broken_streak is None
    created = calls["created"][0]
    assert created.current_streak == 1
    assert created.version == 1
    assert created.updated_at == now_utc


@pytest.mark.asyncio
async def test_record_study_after_gap_archives_broken_streak(monkeypatch) -> None:
    started = datetime(2026, 2, 10, 8, 0, tzinfo=UTC)
    last = datetime(2026, 2, 13, 8, 0, tzinfo=UTC)
    state = _state(current_streak=4, longest_streak=4, last_study_at=last, streak_started_at=started)
    calls = _patch_state(monkeypatch, state)
    now_utc = last + timedelta(days=4)

    result = await StreakService.record_study(_FakeSession(), user_id=42, now_utc=now_utc, policy=POLICY)

    assert calls["past"] == [
        {
            "user_id": 42,
            "streak_length": 4,
            "start_date": date(2026, 2, 10),
            "end_date": date(2026, 2, 13),
            "created_at": now_utc,
        }
    ]
    assert result.broken_streak is not None
    assert result.broken_streak.streak_length == 4
    assert result.current_streak == 1
    assert result.longest_streak == 4
    assert state.current_streak == 1
    assert state.streak_started_at == now_utc


@pytest.mark.asyncio
async def test_get_overview_reports_status_and_stage(monkeypatch) -> None:
    last = datetime(2026, 2, 18, 8, 0, tzinfo=UTC)
    state = _state(current_streak=9, longest_streak=12, last_study_at=last, streak_started_at=last)
    calls = _patch_state(monkeypatch, state)

    overview = await StreakService.get_overview(
        _FakeSession(),
        user_id=42,
        now_utc=last + timedelta(hours=30),
        policy=POLICY,
    )

    assert calls["past"] == []
    assert overview.current_streak == 9
    assert overview.longest_streak == 12
    assert overview.status == StreakStatus.AT_RISK
    assert overview.hours_remaining == 18.0
    assert overview.studied_today is False
    assert overview.stage.name == "Baby Ghost"


@pytest.mark.asyncio
async def test_build_gallery_renders_past_streaks_with_selection(monkeypatch) -> None:
    last = datetime(2026, 2, 18, 8, 0, tzinfo=UTC)
    state = _state(current_streak=3, longest_streak=15, last_study_at=last, streak_started_at=last)
    _patch_state(monkeypatch, state)
    captured: dict[str, object] = {}

    async def _fake_list_recent(session, *, user_id: int, limit: int):
        captured["user_id"] = user_id
        captured["limit"] = limit
        return [
            SimpleNamespace(streak_length=15, start_date=date(2025, 12, 20), end_date=date(2026, 1, 3)),
            SimpleNamespace(streak_length=10, start_date=date(2025, 11, 1), end_date=date(2025, 11, 10)),
        ]

    monkeypatch.setattr(streak_service.StreakRepo, "list_recent_past_streaks", _fake_list_recent)

    view = await StreakService.build_gallery(
        _FakeSession(),
        user_id=42,
        now_utc=last + timedelta(hours=1),
        policy=POLICY,
        selected_index=0,
    )

    assert captured == {"user_id": 42, "limit": 10}
    assert view.summary.past_count == 2
    assert [entry.is_crowned for entry in view.entries] == [True, False]
    assert view.entries[0].formatted_range == "Dec 20, 2025 - Jan 3"
    assert view.entries[1].formatted_range is None
    assert view.selected_index == 0
    assert view.message.variant == MessageVariant.BEAT_RECORD
    assert view.message.days_to_record == 12


@pytest.mark.asyncio
async def test_build_gallery_rejects_out_of_range_selection(monkeypatch) -> None:
    _patch_state(monkeypatch, _state())

    async def _fake_list_recent(session, *, user_id: int, limit: int):
        return []

    monkeypatch.setattr(streak_service.StreakRepo, "list_recent_past_streaks", _fake_list_recent)

    with pytest.raises(GallerySelectionError):
        await StreakService.build_gallery(
            _FakeSession(),
            user_id=42,
            now_utc=datetime(2026, 2, 18, tzinfo=UTC),
            policy=POLICY,
            selected_index=0,
        )


@pytest.mark.asyncio
async def test_reset_clears_streak_values(monkeypatch) -> None:
    last = datetime(2026, 2, 18, 8, 0, tzinfo=UTC)
    state = _state(current_streak=5, longest_streak=20, last_study_at=last, streak_started_at=last)
    _patch_state(monkeypatch, state)
    session = _FakeSession()

    overview = await StreakService.reset(session, user_id=42, now_utc=last, policy=POLICY)

    assert overview.current_streak == 0
    assert overview.longest_streak == 0
    assert overview.status == StreakStatus.BROKEN
    assert state.last_study_at is None
    assert state.version == 1
    assert session.flushes == 1
