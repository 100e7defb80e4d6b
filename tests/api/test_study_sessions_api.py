from __future__ import annotations

from fastapi.testclient import TestClient

from flashdeck.api.routes import study_sessions as study_sessions_routes
from flashdeck.decks.errors import DeckAccessError
from flashdeck.main import app
from tests.api.helpers import DummySessionLocal, make_study_session


def _patch_record(monkeypatch, calls: list[str]) -> None:
    async def _fake_record(session, *, deck_id, user_id, now_utc, **counts):
        calls.append("record")
        return make_study_session(deck_id=deck_id)

    async def _fake_record_study(session, *, user_id, now_utc, policy):
        calls.append(f"streak:{user_id}")

    monkeypatch.setattr(study_sessions_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(study_sessions_routes.StudySessionService, "record", _fake_record)
    monkeypatch.setattr(study_sessions_routes.StreakService, "record_study", _fake_record_study)


def test_create_session_counts_streak_for_known_user(monkeypatch) -> None:
    calls: list[str] = []
    _patch_record(monkeypatch, calls)

    client = TestClient(app)
    response = client.post(
        "/api/study-sessions",
        json={"deck_id": 1, "cards_studied": 10, "cards_correct": 8, "duration_seconds": 120},
        headers={"X-User-Id": "7"},
    )

    assert response.status_code == 201
    assert response.json()["cards_correct"] == 8
    assert calls == ["record", "streak:7"]


def test_create_session_for_guest_skips_streak(monkeypatch) -> None:
    calls: list[str] = []
    _patch_record(monkeypatch, calls)

    client = TestClient(app)
    response = client.post("/api/study-sessions", json={"deck_id": 1})

    assert response.status_code == 201
    assert calls == ["record"]


def test_create_session_rejects_negative_counts() -> None:
    client = TestClient(app)
    response = client.post("/api/study-sessions", json={"deck_id": 1, "cards_studied": -1})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "E_VALIDATION"


def test_list_sessions_forwards_filters(monkeypatch) -> None:
    captured: dict[str, object] = {}

    async def _fake_list_sessions(session, *, user_id, deck_id, limit):
        captured.update(user_id=user_id, deck_id=deck_id, limit=limit)
        return [make_study_session(session_id=2), make_study_session(session_id=1)]

    monkeypatch.setattr(study_sessions_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(study_sessions_routes.StudySessionService, "list_sessions", _fake_list_sessions)

    client = TestClient(app)
    response = client.get("/api/study-sessions?deck_id=1&limit=5", headers={"X-User-Id": "7"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [2, 1]
    assert captured == {"user_id": 7, "deck_id": 1, "limit": 5}


def test_list_sessions_for_foreign_deck_returns_403(monkeypatch) -> None:
    async def _fake_list_sessions(session, *, user_id, deck_id, limit):
        raise DeckAccessError

    monkeypatch.setattr(study_sessions_routes, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(study_sessions_routes.StudySessionService, "list_sessions", _fake_list_sessions)

    client = TestClient(app)
    response = client.get("/api/study-sessions?deck_id=3", headers={"X-User-Id": "7"})

    assert response.status_code == 403
    assert response.json() == {"detail": {"code": "E_FORBIDDEN"}}
