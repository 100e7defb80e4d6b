from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

RECENT_SESSIONS_LIMIT = 10
FAMILIAR_MIN_CORRECT = 2
MASTERED_MIN_CORRECT = 5


class _SessionLike(Protocol):
    cards_studied: int
    cards_correct: int
    duration_seconds: int


class _CardLike(Protocol):
    times_reviewed: int
    times_correct: int


@dataclass(frozen=True, slots=True)
class CardBuckets:
    new: int
    learning: int
    familiar: int
    mastered: int


@dataclass(frozen=True, slots=True)
class DeckStats:
    total_sessions: int
    total_cards_studied: int
    total_correct: int
    accuracy: int
    total_time_seconds: int
    card_count: int
    cards_by_difficulty: CardBuckets
    recent_sessions: list


def bucket_cards(cards: Sequence[_CardLike]) -> CardBuckets:
    new = learning = familiar = mastered = 0
    for card in cards:
        reviewed = card.times_reviewed or 0
        correct = card.times_correct or 0
        if correct >= MASTERED_MIN_CORRECT:
            mastered += 1
        elif correct >= FAMILIAR_MIN_CORRECT:
            familiar += 1
        elif reviewed > 0 or correct > 0:
            learning += 1
        else:
            new += 1
    return CardBuckets(new=new, learning=learning, familiar=familiar, mastered=mastered)


def build_deck_stats(
    sessions: Sequence[_SessionLike],
    cards: Sequence[_CardLike],
) -> DeckStats:
    """Aggregates study history for a deck.

    `sessions` must be ordered newest first; the first ten are reported as
    recent. Accuracy is a whole percentage rounded half up, 0 when nothing
    was studied.
    """
    total_studied = sum(item.cards_studied or 0 for item in sessions)
    total_correct = sum(item.cards_correct or 0 for item in sessions)
    total_time = sum(item.duration_seconds or 0 for item in sessions)
    accuracy = math.floor(total_correct * 100 / total_studied + 0.5) if total_studied > 0 else 0

    return DeckStats(
        total_sessions=len(sessions),
        total_cards_studied=total_studied,
        total_correct=total_correct,
        accuracy=accuracy,
        total_time_seconds=total_time,
        card_count=len(cards),
        cards_by_difficulty=bucket_cards(cards),
        recent_sessions=list(sessions[:RECENT_SESSIONS_LIMIT]),
    )
