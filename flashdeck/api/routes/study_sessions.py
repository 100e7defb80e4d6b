from __future__ import annotations

from fastapi import APIRouter, Query, Request, status

from flashdeck.core.config import get_settings
from flashdeck.db.session import SessionLocal
from flashdeck.decks.errors import DeckError
from flashdeck.decks.service import StudySessionService
from flashdeck.streak.service import StreakService
from flashdeck.streak.types import StreakPolicy

from .decks_models import StudySessionCreateRequest, StudySessionResponse
from .request_helpers import _caller_user_id, _deck_error_as_http, _utc_now

router = APIRouter(prefix="/api/study-sessions", tags=["study-sessions"])


@router.post("", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
async def create_study_session(
    payload: StudySessionCreateRequest,
    request: Request,
) -> StudySessionResponse:
    user_id = _caller_user_id(request)
    now_utc = _utc_now()
    try:
        async with SessionLocal.begin() as session:
            study_session = await StudySessionService.record(
                session,
                deck_id=payload.deck_id,
                user_id=user_id,
                cards_studied=payload.cards_studied,
                cards_correct=payload.cards_correct,
                duration_seconds=payload.duration_seconds,
                session_type=payload.session_type,
                now_utc=now_utc,
            )
            if user_id is not None:
                await StreakService.record_study(
                    session,
                    user_id=user_id,
                    now_utc=now_utc,
                    policy=StreakPolicy.from_settings(get_settings()),
                )
            return StudySessionResponse.model_validate(study_session)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.get("", response_model=list[StudySessionResponse])
async def list_study_sessions(
    request: Request,
    deck_id: int | None = Query(default=None),
    limit: int = Query(default=10, ge=1, le=100),
) -> list[StudySessionResponse]:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            sessions = await StudySessionService.list_sessions(
                session,
                user_id=user_id,
                deck_id=deck_id,
                limit=limit,
            )
            return [StudySessionResponse.model_validate(item) for item in sessions]
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
