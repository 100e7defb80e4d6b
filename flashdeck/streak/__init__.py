from flashdeck.streak.achievements import earned_badges
from flashdeck.streak.dates import format_date, format_date_range
from flashdeck.streak.gallery import GhostGallery
from flashdeck.streak.stages import classify_stage

__all__ = [
    "GhostGallery",
    "classify_stage",
    "earned_badges",
    "format_date",
    "format_date_range",
]
