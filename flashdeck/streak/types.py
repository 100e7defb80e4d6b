from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from flashdeck.streak.constants import (
    DEFAULT_AT_RISK_HOURS,
    DEFAULT_GRACE_HOURS,
    DEFAULT_PAST_STREAKS_LIMIT,
    DEFAULT_TIMEZONE,
)
from flashdeck.streak.errors import InvalidPastStreakError


class StreakStatus(str, Enum):
    ACTIVE = "ACTIVE"
    AT_RISK = "AT_RISK"
    BROKEN = "BROKEN"


class MessageVariant(str, Enum):
    START_NEW = "START_NEW"
    BEAT_RECORD = "BEAT_RECORD"
    AT_BEST = "AT_BEST"


@dataclass(frozen=True, slots=True)
class PastStreak:
    streak_length: int
    start_date: date | None
    end_date: date | None

    def __post_init__(self) -> None:
        if self.streak_length < 0:
            raise InvalidPastStreakError(f"streak_length must be non-negative, got {self.streak_length}")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise InvalidPastStreakError(
                f"end_date {self.end_date.isoformat()} precedes start_date {self.start_date.isoformat()}"
            )


@dataclass(frozen=True, slots=True)
class StreakStage:
    code: str
    name: str
    symbol: str
    visual_weight: float


@dataclass(frozen=True, slots=True)
class Badge:
    threshold: int
    symbol: str
    label: str


@dataclass(slots=True)
class StreakSnapshot:
    current_streak: int
    longest_streak: int
    last_study_at: datetime | None
    streak_started_at: datetime | None
    updated_at: datetime


@dataclass(slots=True)
class StreakOverview:
    current_streak: int
    longest_streak: int
    status: StreakStatus
    hours_remaining: float
    studied_today: bool
    stage: StreakStage


@dataclass(slots=True)
class StreakActivityResult:
    counted_for_streak: bool
    current_streak: int
    longest_streak: int
    status: StreakStatus
    broken_streak: PastStreak | None = None


@dataclass(frozen=True, slots=True)
class GallerySummary:
    current: int
    longest: int
    past_count: int


@dataclass(frozen=True, slots=True)
class GalleryEntry:
    index: int
    stage: StreakStage
    streak_length: int
    is_selected: bool
    is_crowned: bool
    formatted_range: str | None


@dataclass(frozen=True, slots=True)
class GalleryMessage:
    variant: MessageVariant
    text: str
    days_to_record: int | None = None


@dataclass(frozen=True, slots=True)
class GalleryView:
    summary: GallerySummary
    badges: list[Badge]
    entries: list[GalleryEntry]
    message: GalleryMessage
    selected_index: int | None


@dataclass(frozen=True, slots=True)
class StreakPolicy:
    grace_hours: int = DEFAULT_GRACE_HOURS
    at_risk_hours: int = DEFAULT_AT_RISK_HOURS
    timezone_name: str = DEFAULT_TIMEZONE
    past_streaks_limit: int = DEFAULT_PAST_STREAKS_LIMIT

    @classmethod
    def from_settings(cls, settings: Any) -> StreakPolicy:
        return cls(
            grace_hours=settings.streak_grace_hours,
            at_risk_hours=settings.streak_at_risk_hours,
            timezone_name=settings.app_timezone,
            past_streaks_limit=settings.past_streaks_limit,
        )
