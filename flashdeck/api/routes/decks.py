from __future__ import annotations

from fastapi import APIRouter, Request, status

from flashdeck.db.session import SessionLocal
from flashdeck.decks.errors import DeckError
from flashdeck.decks.service import DeckService

from .decks_models import (
    CardResponse,
    DeckDetailsResponse,
    DeckListItemResponse,
    DeckResponse,
    DeckStatsResponse,
    DeckWriteRequest,
    MessageResponse,
    _stats_as_response,
)
from .request_helpers import _caller_user_id, _deck_error_as_http, _utc_now

router = APIRouter(prefix="/api/decks", tags=["decks"])


@router.get("", response_model=list[DeckListItemResponse])
async def list_decks(request: Request) -> list[DeckListItemResponse]:
    user_id = _caller_user_id(request)
    async with SessionLocal.begin() as session:
        summaries = await DeckService.list_decks(session, user_id=user_id)
        return [
            DeckListItemResponse(
                **DeckResponse.model_validate(item.deck).model_dump(),
                card_count=item.card_count,
            )
            for item in summaries
        ]


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(payload: DeckWriteRequest, request: Request) -> DeckResponse:
    user_id = _caller_user_id(request)
    async with SessionLocal.begin() as session:
        deck = await DeckService.create_deck(
            session,
            user_id=user_id,
            title=payload.title,
            description=payload.description,
            now_utc=_utc_now(),
        )
        return DeckResponse.model_validate(deck)


@router.get("/{deck_id}", response_model=DeckDetailsResponse)
async def get_deck(deck_id: int, request: Request) -> DeckDetailsResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            details = await DeckService.get_deck(session, deck_id=deck_id, user_id=user_id)
            deck_payload = DeckResponse.model_validate(details.deck).model_dump()
            cards = [CardResponse.model_validate(card) for card in details.cards]
            return DeckDetailsResponse(**deck_payload, cards=cards)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.put("/{deck_id}", response_model=DeckResponse)
async def update_deck(deck_id: int, payload: DeckWriteRequest, request: Request) -> DeckResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            deck = await DeckService.update_deck(
                session,
                deck_id=deck_id,
                user_id=user_id,
                title=payload.title,
                description=payload.description,
            )
            return DeckResponse.model_validate(deck)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.delete("/{deck_id}", response_model=MessageResponse)
async def delete_deck(deck_id: int, request: Request) -> MessageResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            await DeckService.delete_deck(session, deck_id=deck_id, user_id=user_id)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
    return MessageResponse(message="Deck deleted")


@router.post(
    "/{deck_id}/duplicate",
    response_model=DeckResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_deck(deck_id: int, request: Request) -> DeckResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            deck = await DeckService.duplicate_deck(
                session,
                deck_id=deck_id,
                user_id=user_id,
                now_utc=_utc_now(),
            )
            return DeckResponse.model_validate(deck)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc


@router.get("/{deck_id}/stats", response_model=DeckStatsResponse)
async def get_deck_stats(deck_id: int, request: Request) -> DeckStatsResponse:
    user_id = _caller_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            stats = await DeckService.get_deck_stats(session, deck_id=deck_id, user_id=user_id)
            return _stats_as_response(stats)
    except DeckError as exc:
        raise _deck_error_as_http(exc) from exc
