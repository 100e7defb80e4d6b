from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.past_streaks import PastStreakRecord
from flashdeck.db.models.streak_state import StreakState


class StreakRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: int) -> StreakState | None:
        return await session.get(StreakState, user_id)

    @staticmethod
    async def get_by_user_id_for_update(session: AsyncSession, user_id: int) -> StreakState | None:
        stmt = select(StreakState).where(StreakState.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create_default_state(
        session: AsyncSession, *, user_id: int, now_utc: datetime
    ) -> StreakState:
        state = StreakState(
            user_id=user_id,
            current_streak=0,
            longest_streak=0,
            last_study_at=None,
            streak_started_at=None,
            version=0,
            updated_at=now_utc,
        )
        session.add(state)
        await session.flush()
        return state

    @staticmethod
    async def add_past_streak(
        session: AsyncSession,
        *,
        user_id: int,
        streak_length: int,
        start_date: date | None,
        end_date: date | None,
        created_at: datetime,
    ) -> PastStreakRecord:
        record = PastStreakRecord(
            user_id=user_id,
            streak_length=streak_length,
            start_date=start_date,
            end_date=end_date,
            created_at=created_at,
        )
        session.add(record)
        await session.flush()
        return record

    @staticmethod
    async def list_recent_past_streaks(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int,
    ) -> list[PastStreakRecord]:
        stmt = (
            select(PastStreakRecord)
            .where(PastStreakRecord.user_id == user_id)
            .order_by(PastStreakRecord.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
