from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import HTTPException, Request

from flashdeck.decks.errors import CardNotFoundError, DeckAccessError, DeckError, DeckNotFoundError
from flashdeck.services.request_identity import InvalidUserIdError, extract_user_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _caller_user_id(request: Request) -> int | None:
    try:
        user_id = extract_user_id(request)
    except InvalidUserIdError as exc:
        raise HTTPException(status_code=400, detail={"code": "E_USER_ID_INVALID"}) from exc
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


def _required_user_id(request: Request) -> int:
    user_id = _caller_user_id(request)
    if user_id is None:
        raise HTTPException(status_code=400, detail={"code": "E_USER_REQUIRED"})
    return user_id


def _deck_error_as_http(exc: DeckError) -> HTTPException:
    if isinstance(exc, DeckNotFoundError):
        return HTTPException(status_code=404, detail={"code": "E_DECK_NOT_FOUND"})
    if isinstance(exc, CardNotFoundError):
        return HTTPException(status_code=404, detail={"code": "E_CARD_NOT_FOUND"})
    if isinstance(exc, DeckAccessError):
        return HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})
    return HTTPException(status_code=400, detail={"code": "E_DECK_REQUEST_INVALID"})
