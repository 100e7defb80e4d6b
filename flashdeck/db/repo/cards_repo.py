from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.cards import Card


class CardsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, card_id: int) -> Card | None:
        return await session.get(Card, card_id)

    @staticmethod
    async def list_for_deck(session: AsyncSession, *, deck_id: int) -> list[Card]:
        stmt = select(Card).where(Card.deck_id == deck_id).order_by(Card.position.asc(), Card.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_max_position(session: AsyncSession, *, deck_id: int) -> int | None:
        stmt = select(func.max(Card.position)).where(Card.deck_id == deck_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        deck_id: int,
        front: str,
        back: str,
        position: int,
        created_at: datetime,
    ) -> Card:
        card = Card(
            deck_id=deck_id,
            front=front,
            back=back,
            position=position,
            difficulty=0,
            times_reviewed=0,
            times_correct=0,
            created_at=created_at,
        )
        session.add(card)
        await session.flush()
        return card

    @staticmethod
    async def delete_by_id(session: AsyncSession, card_id: int) -> None:
        await session.execute(delete(Card).where(Card.id == card_id))

    @staticmethod
    async def set_positions(
        session: AsyncSession,
        *,
        deck_id: int,
        card_ids: Sequence[int],
    ) -> int:
        updated = 0
        for position, card_id in enumerate(card_ids):
            result = await session.execute(
                update(Card)
                .where(Card.id == card_id, Card.deck_id == deck_id)
                .values(position=position)
            )
            updated += int(result.rowcount or 0)
        return updated
