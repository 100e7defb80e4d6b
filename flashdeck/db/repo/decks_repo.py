from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.cards import Card
from flashdeck.db.models.decks import Deck


class DecksRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, deck_id: int) -> Deck | None:
        return await session.get(Deck, deck_id)

    @staticmethod
    async def list_for_owner_with_card_counts(
        session: AsyncSession,
        *,
        user_id: int | None,
    ) -> list[tuple[Deck, int]]:
        card_counts = (
            select(Card.deck_id, func.count(Card.id).label("card_count"))
            .group_by(Card.deck_id)
            .subquery()
        )
        owner_clause = Deck.user_id.is_(None) if user_id is None else Deck.user_id == user_id
        stmt = (
            select(Deck, func.coalesce(card_counts.c.card_count, 0))
            .outerjoin(card_counts, card_counts.c.deck_id == Deck.id)
            .where(owner_clause)
            .order_by(Deck.created_at.desc(), Deck.id.desc())
        )
        result = await session.execute(stmt)
        return [(deck, int(card_count)) for deck, card_count in result.all()]

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        user_id: int | None,
        title: str,
        description: str,
        created_at: datetime,
    ) -> Deck:
        deck = Deck(
            user_id=user_id,
            title=title,
            description=description,
            created_at=created_at,
        )
        session.add(deck)
        await session.flush()
        return deck

    @staticmethod
    async def delete_by_id(session: AsyncSession, deck_id: int) -> None:
        await session.execute(delete(Card).where(Card.deck_id == deck_id))
        await session.execute(delete(Deck).where(Deck.id == deck_id))

    @staticmethod
    async def mark_studied(session: AsyncSession, *, deck_id: int, studied_at: datetime) -> None:
        deck = await session.get(Deck, deck_id)
        if deck is None:
            return
        deck.last_studied = studied_at
        await session.flush()
