from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from flashdeck.decks.stats import DeckStats


class DeckWriteRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)


class CardWriteRequest(BaseModel):
    front: str = Field(min_length=1)
    back: str = Field(min_length=1)


class CardProgressRequest(BaseModel):
    difficulty: int | None = None
    times_reviewed: int | None = Field(default=None, ge=0)
    times_correct: int | None = Field(default=None, ge=0)
    last_reviewed: datetime | None = None
    next_review: datetime | None = None


class CardReorderRequest(BaseModel):
    card_ids: list[int]


class StudySessionCreateRequest(BaseModel):
    deck_id: int
    cards_studied: int = Field(default=0, ge=0)
    cards_correct: int = Field(default=0, ge=0)
    duration_seconds: int = Field(default=0, ge=0)
    session_type: str = Field(default="study", min_length=1, max_length=16)


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    deck_id: int
    front: str
    back: str
    position: int
    difficulty: int
    times_reviewed: int
    times_correct: int
    last_reviewed: datetime | None
    next_review: datetime | None
    created_at: datetime


class DeckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None
    title: str
    description: str
    last_studied: datetime | None
    created_at: datetime


class DeckListItemResponse(DeckResponse):
    card_count: int = Field(ge=0)


class DeckDetailsResponse(DeckResponse):
    cards: list[CardResponse]


class StudySessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    deck_id: int
    cards_studied: int
    cards_correct: int
    duration_seconds: int
    session_type: str
    created_at: datetime


class CardBucketsResponse(BaseModel):
    new: int = Field(ge=0)
    learning: int = Field(ge=0)
    familiar: int = Field(ge=0)
    mastered: int = Field(ge=0)


class DeckStatsResponse(BaseModel):
    total_sessions: int = Field(ge=0)
    total_cards_studied: int = Field(ge=0)
    total_correct: int = Field(ge=0)
    accuracy: int = Field(ge=0)
    total_time_seconds: int = Field(ge=0)
    card_count: int = Field(ge=0)
    mastered_count: int = Field(ge=0)
    cards_by_difficulty: CardBucketsResponse
    recent_sessions: list[StudySessionResponse]


class MessageResponse(BaseModel):
    message: str


def _stats_as_response(stats: DeckStats) -> DeckStatsResponse:
    buckets = stats.cards_by_difficulty
    return DeckStatsResponse(
        total_sessions=stats.total_sessions,
        total_cards_studied=stats.total_cards_studied,
        total_correct=stats.total_correct,
        accuracy=stats.accuracy,
        total_time_seconds=stats.total_time_seconds,
        card_count=stats.card_count,
        mastered_count=buckets.mastered,
        cards_by_difficulty=CardBucketsResponse(
            new=buckets.new,
            learning=buckets.learning,
            familiar=buckets.familiar,
            mastered=buckets.mastered,
        ),
        recent_sessions=[StudySessionResponse.model_validate(item) for item in stats.recent_sessions],
    )
