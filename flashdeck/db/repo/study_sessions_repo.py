from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.decks import Deck
from flashdeck.db.models.study_sessions import StudySession


class StudySessionsRepo:
    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        deck_id: int,
        cards_studied: int,
        cards_correct: int,
        duration_seconds: int,
        session_type: str,
        created_at: datetime,
    ) -> StudySession:
        study_session = StudySession(
            deck_id=deck_id,
            cards_studied=cards_studied,
            cards_correct=cards_correct,
            duration_seconds=duration_seconds,
            session_type=session_type,
            created_at=created_at,
        )
        session.add(study_session)
        await session.flush()
        return study_session

    @staticmethod
    async def list_for_deck(
        session: AsyncSession,
        *,
        deck_id: int,
        limit: int | None = None,
    ) -> list[StudySession]:
        stmt = (
            select(StudySession)
            .where(StudySession.deck_id == deck_id)
            .order_by(StudySession.created_at.desc(), StudySession.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_for_owner(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int,
    ) -> list[StudySession]:
        stmt = (
            select(StudySession)
            .join(Deck, Deck.id == StudySession.deck_id)
            .where(Deck.user_id == user_id)
            .order_by(StudySession.created_at.desc(), StudySession.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
