from __future__ import annotations

from fastapi import APIRouter, Request, status

from flashdeck.db.session import SessionLocal
from flashdeck.decks.errors import DeckError
from flashdeck.decks.service import CardService

from .decks_models import (
    CardProgressRequest,
    CardReorderRequest,
    CardResponse,
    CardWriteRequest,
    MessageResponse,
)
from .request_helpers import _caller_user_id, _deck_error_as_http, _utc_now

router = APIRouter(prefix="/api", tags=["cards"])


@router.post(
    "/decks/{deck_id}/cards",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_card(deck_id: int, payload: CardWriteRequest, request: Request) -> CardResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            card = await CardService.add_card(
                session,
                deck_id=deck_id,
                user_id=user_id,
                front=payload.front,
                back=payload.back,
                now_utc=_utc_now(),
            )
            return CardResponse.model_validate(card)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.put("/decks/{deck_id}/cards/reorder", response_model=MessageResponse)
async def reorder_cards(deck_id: int, payload: CardReorderRequest, request: Request) -> MessageResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            await CardService.reorder_cards(
                session,
                deck_id=deck_id,
                user_id=user_id,
                card_ids=payload.card_ids,
            )
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
    return MessageResponse(message="Cards reordered")


@router.put("/cards/{card_id}", response_model=CardResponse)
async def update_card(card_id: int, payload: CardWriteRequest, request: Request) -> CardResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            card = await CardService.update_card(
                session,
                card_id=card_id,
                user_id=user_id,
                front=payload.front,
                back=payload.back,
            )
            return CardResponse.model_validate(card)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.delete("/cards/{card_id}", response_model=MessageResponse)
async def delete_card(card_id: int, request: Request) -> MessageResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            await CardService.delete_card(session, card_id=card_id, user_id=user_id)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
    return MessageResponse(message="Card deleted")


@router.put("/cards/{card_id}/progress", response_model=CardResponse)
async def update_card_progress(
    card_id: int,
    payload: CardProgressRequest,
    request: Request,
) -> CardResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            card = await CardService.update_progress(
                session,
                card_id=card_id,
                user_id=user_id,
                changes=payload.model_dump(exclude_none=True),
            )
            return CardResponse.model_validate(card)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
