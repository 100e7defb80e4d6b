from __future__ import annotations

from flashdeck.streak.errors import StreakValueError
from flashdeck.streak.types import Badge

BADGES: tuple[Badge, ...] = (
    Badge(threshold=7, symbol="🏅", label="Week Warrior"),
    Badge(threshold=14, symbol="🎖️", label="Fortnight Fighter"),
    Badge(threshold=30, symbol="🏆", label="Monthly Master"),
    Badge(threshold=60, symbol="💎", label="Diamond Scholar"),
    Badge(threshold=100, symbol="👑", label="Century Champion"),
)


def earned_badges(longest_streak: int) -> list[Badge]:
    """Returns badges unlocked by the longest streak, ascending by threshold."""
    if longest_streak < 0:
        raise StreakValueError(f"longest_streak must be non-negative, got {longest_streak}")
    return [badge for badge in BADGES if longest_streak >= badge.threshold]
