from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def touch_or_create(session: AsyncSession, *, user_id: int, now_utc: datetime) -> User:
        user = await session.get(User, user_id)
        if user is None:
            user = User(id=user_id, created_at=now_utc, last_seen_at=now_utc)
            session.add(user)
        else:
            user.last_seen_at = now_utc
        await session.flush()
        return user
