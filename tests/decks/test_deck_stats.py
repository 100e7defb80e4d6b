from __future__ import annotations

from types import SimpleNamespace

from flashdeck.decks.stats import build_deck_stats, bucket_cards


def _session(studied: int, correct: int, seconds: int) -> SimpleNamespace:
    return SimpleNamespace(cards_studied=studied, cards_correct=correct, duration_seconds=seconds)


def _card(reviewed: int, correct: int) -> SimpleNamespace:
    return SimpleNamespace(times_reviewed=reviewed, times_correct=correct)


def test_empty_deck_stats() -> None:
    stats = build_deck_stats([], [])

    assert stats.total_sessions == 0
    assert stats.accuracy == 0
    assert stats.card_count == 0
    assert stats.recent_sessions == []


def test_totals_and_accuracy() -> None:
    sessions = [_session(10, 7, 120), _session(6, 5, 60), _session(4, 0, 30)]

    stats = build_deck_stats(sessions, [])

    assert stats.total_sessions == 3
    assert stats.total_cards_studied == 20
    assert stats.total_correct == 12
    assert stats.total_time_seconds == 210
    assert stats.accuracy == 60


def test_accuracy_rounds_half_up() -> None:
    stats = build_deck_stats([_session(8, 1, 0)], [])

    assert stats.accuracy == 13


def test_recent_sessions_limited_to_ten() -> None:
    sessions = [_session(1, 1, 1) for _ in range(14)]

    stats = build_deck_stats(sessions, [])

    assert len(stats.recent_sessions) == 10
    assert stats.recent_sessions[0] is sessions[0]


def test_card_buckets() -> None:
    cards = [
        _card(0, 0),
        _card(0, 0),
        _card(3, 1),
        _card(4, 2),
        _card(6, 4),
        _card(9, 5),
        _card(20, 12),
    ]

    buckets = bucket_cards(cards)

    assert (buckets.new, buckets.learning, buckets.familiar, buckets.mastered) == (2, 1, 2, 2)
    assert build_deck_stats([], cards).card_count == 7


def test_correct_without_reviews_counts_as_learning() -> None:
    cards = [_card(0, 1), _card(0, 0), _card(None, None)]

    stats = build_deck_stats([], cards)
    buckets = stats.cards_by_difficulty

    assert (buckets.new, buckets.learning, buckets.familiar, buckets.mastered) == (2, 1, 0, 0)
    assert buckets.new + buckets.learning + buckets.familiar + buckets.mastered == stats.card_count
