from flashdeck.db.models.cards import Card
from flashdeck.db.models.decks import Deck
from flashdeck.db.models.past_streaks import PastStreakRecord
from flashdeck.db.models.streak_state import StreakState
from flashdeck.db.models.study_sessions import StudySession
from flashdeck.db.models.users import User

__all__ = [
    "Card",
    "Deck",
    "PastStreakRecord",
    "StreakState",
    "StudySession",
    "User",
]
