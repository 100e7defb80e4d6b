from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

FIXED_NOW = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)


class DummySessionBegin:
    async def __aenter__(self) -> object:
        return object()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class DummySessionLocal:
    def begin(self) -> DummySessionBegin:
        return DummySessionBegin()


def make_deck(*, deck_id: int = 1, user_id: int | None = 7, title: str = "Verbs") -> SimpleNamespace:
    return SimpleNamespace(
        id=deck_id,
        user_id=user_id,
        title=title,
        description="",
        last_studied=None,
        created_at=FIXED_NOW,
    )


def make_card(*, card_id: int = 1, deck_id: int = 1, position: int = 0) -> SimpleNamespace:
    return SimpleNamespace(
        id=card_id,
        deck_id=deck_id,
        front="hola",
        back="hello",
        position=position,
        difficulty=0,
        times_reviewed=0,
        times_correct=0,
        last_reviewed=None,
        next_review=None,
        created_at=FIXED_NOW,
    )


def make_study_session(*, session_id: int = 1, deck_id: int = 1) -> SimpleNamespace:
    return SimpleNamespace(
        id=session_id,
        deck_id=deck_id,
        cards_studied=10,
        cards_correct=8,
        duration_seconds=120,
        session_type="study",
        created_at=FIXED_NOW,
    )
