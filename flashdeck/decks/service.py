from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.cards import Card
from flashdeck.db.models.decks import Deck
from flashdeck.db.models.study_sessions import StudySession
from flashdeck.db.repo.cards_repo import CardsRepo
from flashdeck.db.repo.decks_repo import DecksRepo
from flashdeck.db.repo.study_sessions_repo import StudySessionsRepo
from flashdeck.db.repo.users_repo import UsersRepo
from flashdeck.decks.errors import CardNotFoundError, DeckAccessError, DeckNotFoundError
from flashdeck.decks.stats import DeckStats, build_deck_stats

logger = structlog.get_logger(__name__)

COPY_TITLE_SUFFIX = " (Copy)"
PROGRESS_FIELDS = ("difficulty", "times_reviewed", "times_correct", "last_reviewed", "next_review")


@dataclass(slots=True)
class DeckSummary:
    deck: Deck
    card_count: int


@dataclass(slots=True)
class DeckDetails:
    deck: Deck
    cards: list[Card]


class DeckService:
    @staticmethod
    async def _ensure_owner(session: AsyncSession, *, user_id: int | None, now_utc: datetime) -> None:
        if user_id is not None:
            await UsersRepo.touch_or_create(session, user_id=user_id, now_utc=now_utc)

    @staticmethod
    async def get_owned_deck(session: AsyncSession, *, deck_id: int, user_id: int | None) -> Deck:
        deck = await DecksRepo.get_by_id(session, deck_id)
        if deck is None:
            raise DeckNotFoundError
        if deck.user_id != user_id:
            raise DeckAccessError
        return deck

    @staticmethod
    async def get_owned_card(session: AsyncSession, *, card_id: int, user_id: int | None) -> Card:
        card = await CardsRepo.get_by_id(session, card_id)
        if card is None:
            raise CardNotFoundError
        deck = await DecksRepo.get_by_id(session, card.deck_id)
        if deck is None or deck.user_id != user_id:
            raise DeckAccessError
        return card

    @staticmethod
    async def list_decks(session: AsyncSession, *, user_id: int | None) -> list[DeckSummary]:
        rows = await DecksRepo.list_for_owner_with_card_counts(session, user_id=user_id)
        return [DeckSummary(deck=deck, card_count=card_count) for deck, card_count in rows]

    @staticmethod
    async def create_deck(
        session: AsyncSession,
        *,
        user_id: int | None,
        title: str,
        description: str,
        now_utc: datetime,
    ) -> Deck:
        await DeckService._ensure_owner(session, user_id=user_id, now_utc=now_utc)
        deck = await DecksRepo.create(
            session,
            user_id=user_id,
            title=title,
            description=description,
            created_at=now_utc,
        )
        logger.info("deck_created", deck_id=deck.id, user_id=user_id)
        return deck

    @staticmethod
    async def get_deck(session: AsyncSession, *, deck_id: int, user_id: int | None) -> DeckDetails:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        cards = await CardsRepo.list_for_deck(session, deck_id=deck.id)
        return DeckDetails(deck=deck, cards=cards)

    @staticmethod
    async def update_deck(
        session: AsyncSession,
        *,
        deck_id: int,
        user_id: int | None,
        title: str,
        description: str,
    ) -> Deck:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        deck.title = title
        deck.description = description
        await session.flush()
        return deck

    @staticmethod
    async def delete_deck(session: AsyncSession, *, deck_id: int, user_id: int | None) -> None:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        await DecksRepo.delete_by_id(session, deck.id)
        logger.info("deck_deleted", deck_id=deck.id, user_id=user_id)

    @staticmethod
    async def duplicate_deck(
        session: AsyncSession,
        *,
        deck_id: int,
        user_id: int | None,
        now_utc: datetime,
    ) -> Deck:
        source = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        copy = await DecksRepo.create(
            session,
            user_id=user_id,
            title=f"{source.title}{COPY_TITLE_SUFFIX}",
            description=source.description,
            created_at=now_utc,
        )
        for card in await CardsRepo.list_for_deck(session, deck_id=source.id):
            await CardsRepo.create(
                session,
                deck_id=copy.id,
                front=card.front,
                back=card.back,
                position=card.position,
                created_at=now_utc,
            )
        logger.info("deck_duplicated", source_deck_id=source.id, deck_id=copy.id, user_id=user_id)
        return copy

    @staticmethod
    async def get_deck_stats(session: AsyncSession, *, deck_id: int, user_id: int | None) -> DeckStats:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        sessions = await StudySessionsRepo.list_for_deck(session, deck_id=deck.id)
        cards = await CardsRepo.list_for_deck(session, deck_id=deck.id)
        return build_deck_stats(sessions, cards)


class CardService:
    @staticmethod
    async def add_card(
        session: AsyncSession,
        *,
        deck_id: int,
        user_id: int | None,
        front: str,
        back: str,
        now_utc: datetime,
    ) -> Card:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        max_position = await CardsRepo.get_max_position(session, deck_id=deck.id)
        position = 0 if max_position is None else max_position + 1
        return await CardsRepo.create(
            session,
            deck_id=deck.id,
            front=front,
            back=back,
            position=position,
            created_at=now_utc,
        )

    @staticmethod
    async def update_card(
        session: AsyncSession,
        *,
        card_id: int,
        user_id: int | None,
        front: str,
        back: str,
    ) -> Card:
        card = await DeckService.get_owned_card(session, card_id=card_id, user_id=user_id)
        card.front = front
        card.back = back
        await session.flush()
        return card

    @staticmethod
    async def delete_card(session: AsyncSession, *, card_id: int, user_id: int | None) -> None:
        card = await DeckService.get_owned_card(session, card_id=card_id, user_id=user_id)
        await CardsRepo.delete_by_id(session, card.id)

    @staticmethod
    async def update_progress(
        session: AsyncSession,
        *,
        card_id: int,
        user_id: int | None,
        changes: dict[str, object],
    ) -> Card:
        """Applies only the provided progress fields; missing keys keep their value."""
        card = await DeckService.get_owned_card(session, card_id=card_id, user_id=user_id)
        for field in PROGRESS_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(card, field, value)
        await session.flush()
        return card

    @staticmethod
    async def reorder_cards(
        session: AsyncSession,
        *,
        deck_id: int,
        user_id: int | None,
        card_ids: Sequence[int],
    ) -> int:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        return await CardsRepo.set_positions(session, deck_id=deck.id, card_ids=card_ids)


class StudySessionService:
    @staticmethod
    async def record(
        session: AsyncSession,
        *,
        deck_id: int,
        user_id: int | None,
        cards_studied: int,
        cards_correct: int,
        duration_seconds: int,
        session_type: str,
        now_utc: datetime,
    ) -> StudySession:
        deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
        study_session = await StudySessionsRepo.create(
            session,
            deck_id=deck.id,
            cards_studied=cards_studied,
            cards_correct=cards_correct,
            duration_seconds=duration_seconds,
            session_type=session_type,
            created_at=now_utc,
        )
        await DecksRepo.mark_studied(session, deck_id=deck.id, studied_at=now_utc)
        logger.info(
            "study_session_recorded",
            deck_id=deck.id,
            user_id=user_id,
            cards_studied=cards_studied,
            session_type=session_type,
        )
        return study_session

    @staticmethod
    async def list_sessions(
        session: AsyncSession,
        *,
        user_id: int | None,
        deck_id: int | None,
        limit: int,
    ) -> list[StudySession]:
        if deck_id is not None:
            deck = await DeckService.get_owned_deck(session, deck_id=deck_id, user_id=user_id)
            return await StudySessionsRepo.list_for_deck(session, deck_id=deck.id, limit=limit)
        if user_id is None:
            return []
        return await StudySessionsRepo.list_for_owner(session, user_id=user_id, limit=limit)
