from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from flashdeck.streak.achievements import earned_badges
from flashdeck.streak.dates import format_date_range
from flashdeck.streak.errors import GalleryClosedError, GallerySelectionError, StreakValueError
from flashdeck.streak.stages import classify_stage
from flashdeck.streak.types import (
    GalleryEntry,
    GalleryMessage,
    GallerySummary,
    GalleryView,
    MessageVariant,
    PastStreak,
)


def build_message(*, current_streak: int, longest_streak: int) -> GalleryMessage:
    if current_streak == 0:
        return GalleryMessage(variant=MessageVariant.START_NEW, text="Start a new streak today!")

    if current_streak < longest_streak:
        days_left = longest_streak - current_streak
        suffix = "" if days_left == 1 else "s"
        return GalleryMessage(
            variant=MessageVariant.BEAT_RECORD,
            text=f"{days_left} more day{suffix} to beat your record!",
            days_to_record=days_left,
        )

    return GalleryMessage(variant=MessageVariant.AT_BEST, text="You're at your best! Keep going!")


class GhostGallery:
    """View-model for the past-streak gallery.

    Derives display data from a snapshot of past streaks and the current and
    longest streak values, and owns the only mutable state of the gallery:
    which past-streak entry (if any) is expanded. Input data is never mutated.

    `today` is injected so date labels are deterministic.
    """

    def __init__(self, *, today: date) -> None:
        self._today = today
        self._selected_index: int | None = None
        self._rendered_count: int | None = None
        self._closed = False

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    @property
    def is_closed(self) -> bool:
        return self._closed

    def render(
        self,
        past_streaks: Sequence[PastStreak],
        longest_streak: int,
        current_streak: int,
    ) -> GalleryView:
        self._ensure_open()
        if longest_streak < 0 or current_streak < 0:
            raise StreakValueError("streak values must be non-negative")

        if self._selected_index is not None and self._selected_index >= len(past_streaks):
            self._selected_index = None

        entries = []
        for index, past in enumerate(past_streaks):
            is_selected = index == self._selected_index
            entries.append(
                GalleryEntry(
                    index=index,
                    stage=classify_stage(past.streak_length),
                    streak_length=past.streak_length,
                    is_selected=is_selected,
                    is_crowned=past.streak_length == longest_streak,
                    formatted_range=(
                        format_date_range(past.start_date, past.end_date, today=self._today)
                        if is_selected
                        else None
                    ),
                )
            )
        self._rendered_count = len(entries)

        return GalleryView(
            summary=GallerySummary(
                current=current_streak,
                longest=longest_streak,
                past_count=len(past_streaks),
            ),
            badges=earned_badges(longest_streak),
            entries=entries,
            message=build_message(current_streak=current_streak, longest_streak=longest_streak),
            selected_index=self._selected_index,
        )

    def select(self, index: int) -> int | None:
        """Toggles the expanded entry and returns the new selection."""
        self._ensure_open()
        if self._rendered_count is None:
            raise GallerySelectionError("gallery must be rendered before selecting an entry")
        if not 0 <= index < self._rendered_count:
            raise GallerySelectionError(
                f"index {index} is outside the rendered range [0, {self._rendered_count})"
            )

        self._selected_index = None if self._selected_index == index else index
        return self._selected_index

    def close(self) -> None:
        self._selected_index = None
        self._rendered_count = None
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise GalleryClosedError("gallery is closed")
