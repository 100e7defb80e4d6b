from __future__ import annotations

from flashdeck.streak.errors import StreakValueError
from flashdeck.streak.types import StreakStage

WISP = StreakStage(code="wisp", name="Wisp", symbol="👻", visual_weight=0.40)
SPIRIT_ORB = StreakStage(code="orb", name="Spirit Orb", symbol="🔮", visual_weight=0.55)
BABY_GHOST = StreakStage(code="small", name="Baby Ghost", symbol="👻", visual_weight=0.70)
GHOST = StreakStage(code="medium", name="Ghost", symbol="👻", visual_weight=0.85)
PHANTOM = StreakStage(code="full", name="Phantom", symbol="👑", visual_weight=1.00)

# (inclusive upper bound, stage); anything above the last bound is a Phantom.
STAGE_TIERS: tuple[tuple[int, StreakStage], ...] = (
    (3, WISP),
    (7, SPIRIT_ORB),
    (14, BABY_GHOST),
    (30, GHOST),
)


def classify_stage(streak_length: int) -> StreakStage:
    """Maps a streak length in days to its cosmetic ghost stage."""
    if streak_length < 0:
        raise StreakValueError(f"streak_length must be non-negative, got {streak_length}")
    for upper_bound, stage in STAGE_TIERS:
        if streak_length <= upper_bound:
            return stage
    return PHANTOM
