from flashdeck.db.repo.cards_repo import CardsRepo
from flashdeck.db.repo.decks_repo import DecksRepo
from flashdeck.db.repo.streak_repo import StreakRepo
from flashdeck.db.repo.study_sessions_repo import StudySessionsRepo
from flashdeck.db.repo.users_repo import UsersRepo

__all__ = [
    "CardsRepo",
    "DecksRepo",
    "StreakRepo",
    "StudySessionsRepo",
    "UsersRepo",
]
