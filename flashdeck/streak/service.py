from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.db.models.past_streaks import PastStreakRecord
from flashdeck.db.models.streak_state import StreakState
from flashdeck.db.repo.streak_repo import StreakRepo
from flashdeck.db.repo.users_repo import UsersRepo
from flashdeck.streak.gallery import GhostGallery
from flashdeck.streak.rules import (
    classify_streak_status,
    expire_if_broken,
    hours_remaining,
    record_study,
    studied_today,
)
from flashdeck.streak.stages import classify_stage
from flashdeck.streak.time import local_date
from flashdeck.streak.types import (
    GalleryView,
    PastStreak,
    StreakActivityResult,
    StreakOverview,
    StreakPolicy,
    StreakSnapshot,
)

logger = structlog.get_logger(__name__)


class StreakService:
    @staticmethod
    def _snapshot_from_model(state: StreakState) -> StreakSnapshot:
        return StreakSnapshot(
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            last_study_at=state.last_study_at,
            streak_started_at=state.streak_started_at,
            updated_at=state.updated_at,
        )

    @staticmethod
    def _apply_snapshot_to_model(state: StreakState, snapshot: StreakSnapshot, now_utc: datetime) -> None:
        state.current_streak = snapshot.current_streak
        state.longest_streak = snapshot.longest_streak
        state.last_study_at = snapshot.last_study_at
        state.streak_started_at = snapshot.streak_started_at
        state.updated_at = now_utc
        state.version += 1

    @staticmethod
    def _past_streak_from_model(record: PastStreakRecord) -> PastStreak:
        return PastStreak(
            streak_length=record.streak_length,
            start_date=record.start_date,
            end_date=record.end_date,
        )

    @staticmethod
    async def _get_or_create_state_for_update(
        session: AsyncSession,
        user_id: int,
        now_utc: datetime,
    ) -> StreakState:
        state = await StreakRepo.get_by_user_id_for_update(session, user_id)
        if state is not None:
            return state
        await UsersRepo.touch_or_create(session, user_id=user_id, now_utc=now_utc)
        return await StreakRepo.create_default_state(session, user_id=user_id, now_utc=now_utc)

    @staticmethod
    async def _sync_expiry(
        session: AsyncSession,
        *,
        state: StreakState,
        now_utc: datetime,
        policy: StreakPolicy,
    ) -> tuple[StreakSnapshot, PastStreak | None]:
        snapshot = StreakService._snapshot_from_model(state)
        snapshot, broken = expire_if_broken(
            snapshot,
            now_utc=now_utc,
            grace_hours=policy.grace_hours,
            timezone_name=policy.timezone_name,
        )
        if broken is None:
            return snapshot, None

        await StreakRepo.add_past_streak(
            session,
            user_id=state.user_id,
            streak_length=broken.streak_length,
            start_date=broken.start_date,
            end_date=broken.end_date,
            created_at=now_utc,
        )
        StreakService._apply_snapshot_to_model(state, snapshot, now_utc)
        await session.flush()
        logger.info(
            "streak_broken",
            user_id=state.user_id,
            streak_length=broken.streak_length,
            longest_streak=snapshot.longest_streak,
        )
        return snapshot, broken

    @staticmethod
    def _overview(snapshot: StreakSnapshot, *, now_utc: datetime, policy: StreakPolicy) -> StreakOverview:
        return StreakOverview(
            current_streak=snapshot.current_streak,
            longest_streak=snapshot.longest_streak,
            status=classify_streak_status(
                snapshot,
                now_utc=now_utc,
                grace_hours=policy.grace_hours,
                at_risk_hours=policy.at_risk_hours,
            ),
            hours_remaining=hours_remaining(snapshot, now_utc=now_utc, grace_hours=policy.grace_hours),
            studied_today=studied_today(snapshot, now_utc=now_utc, timezone_name=policy.timezone_name),
            stage=classify_stage(snapshot.current_streak),
        )

    @staticmethod
    async def get_overview(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        policy: StreakPolicy,
    ) -> StreakOverview:
        state = await StreakService._get_or_create_state_for_update(session, user_id, now_utc)
        snapshot, _ = await StreakService._sync_expiry(session, state=state, now_utc=now_utc, policy=policy)
        return StreakService._overview(snapshot, now_utc=now_utc, policy=policy)

    @staticmethod
    async def record_study(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        policy: StreakPolicy,
    ) -> StreakActivityResult:
        state = await StreakService._get_or_create_state_for_update(session, user_id, now_utc)
        snapshot, broken = await StreakService._sync_expiry(
            session,
            state=state,
            now_utc=now_utc,
            policy=policy,
        )
        snapshot, counted = record_study(
            snapshot,
            now_utc=now_utc,
            grace_hours=policy.grace_hours,
            timezone_name=policy.timezone_name,
        )

        StreakService._apply_snapshot_to_model(state, snapshot, now_utc)
        await session.flush()
        if counted:
            logger.info(
                "streak_study_counted",
                user_id=user_id,
                current_streak=snapshot.current_streak,
                longest_streak=snapshot.longest_streak,
            )
        return StreakActivityResult(
            counted_for_streak=counted,
            current_streak=snapshot.current_streak,
            longest_streak=snapshot.longest_streak,
            status=classify_streak_status(
                snapshot,
                now_utc=now_utc,
                grace_hours=policy.grace_hours,
                at_risk_hours=policy.at_risk_hours,
            ),
            broken_streak=broken,
        )

    @staticmethod
    async def list_past_streaks(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int,
    ) -> list[PastStreak]:
        records = await StreakRepo.list_recent_past_streaks(session, user_id=user_id, limit=limit)
        return [StreakService._past_streak_from_model(record) for record in records]

    @staticmethod
    async def build_gallery(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        policy: StreakPolicy,
        selected_index: int | None = None,
    ) -> GalleryView:
        state = await StreakService._get_or_create_state_for_update(session, user_id, now_utc)
        snapshot, _ = await StreakService._sync_expiry(session, state=state, now_utc=now_utc, policy=policy)
        past_streaks = await StreakService.list_past_streaks(
            session,
            user_id=user_id,
            limit=policy.past_streaks_limit,
        )

        gallery = GhostGallery(today=local_date(now_utc, policy.timezone_name))
        view = gallery.render(past_streaks, snapshot.longest_streak, snapshot.current_streak)
        if selected_index is not None:
            gallery.select(selected_index)
            view = gallery.render(past_streaks, snapshot.longest_streak, snapshot.current_streak)
        gallery.close()
        return view

    @staticmethod
    async def reset(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        policy: StreakPolicy,
    ) -> StreakOverview:
        state = await StreakService._get_or_create_state_for_update(session, user_id, now_utc)
        snapshot = replace(
            StreakService._snapshot_from_model(state),
            current_streak=0,
            longest_streak=0,
            last_study_at=None,
            streak_started_at=None,
        )
        StreakService._apply_snapshot_to_model(state, snapshot, now_utc)
        await session.flush()
        logger.info("streak_reset", user_id=user_id)
        return StreakService._overview(snapshot, now_utc=now_utc, policy=policy)
