from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from flashdeck.core.config import get_settings
from flashdeck.db.session import SessionLocal
from flashdeck.streak.errors import GallerySelectionError
from flashdeck.streak.service import StreakService
from flashdeck.streak.types import (
    Badge,
    GalleryView,
    MessageVariant,
    StreakActivityResult,
    StreakOverview,
    StreakPolicy,
    StreakStage,
    StreakStatus,
)

from .request_helpers import _required_user_id, _utc_now

router = APIRouter(prefix="/api/streak", tags=["streak"])
logger = structlog.get_logger(__name__)


class StreakStageResponse(BaseModel):
    code: str
    name: str
    symbol: str
    visual_weight: float = Field(gt=0.0, le=1.0)


class StreakOverviewResponse(BaseModel):
    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    status: StreakStatus
    hours_remaining: float = Field(ge=0.0)
    studied_today: bool
    stage: StreakStageResponse


class PastStreakResponse(BaseModel):
    streak_length: int = Field(ge=0)
    start_date: str | None
    end_date: str | None


class StreakActivityResponse(BaseModel):
    counted_for_streak: bool
    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    status: StreakStatus
    broken_streak: PastStreakResponse | None


class BadgeResponse(BaseModel):
    threshold: int
    symbol: str
    label: str


class GallerySummaryResponse(BaseModel):
    current: int = Field(ge=0)
    longest: int = Field(ge=0)
    past_count: int = Field(ge=0)


class GalleryEntryResponse(BaseModel):
    index: int = Field(ge=0)
    stage: StreakStageResponse
    streak_length: int = Field(ge=0)
    is_selected: bool
    is_crowned: bool
    formatted_range: str | None


class GalleryMessageResponse(BaseModel):
    variant: MessageVariant
    text: str
    days_to_record: int | None


class GalleryResponse(BaseModel):
    summary: GallerySummaryResponse
    badges: list[BadgeResponse]
    entries: list[GalleryEntryResponse]
    message: GalleryMessageResponse
    selected_index: int | None


def _policy() -> StreakPolicy:
    return StreakPolicy.from_settings(get_settings())


def _stage_as_response(stage: StreakStage) -> StreakStageResponse:
    return StreakStageResponse(
        code=stage.code,
        name=stage.name,
        symbol=stage.symbol,
        visual_weight=stage.visual_weight,
    )


def _badge_as_response(badge: Badge) -> BadgeResponse:
    return BadgeResponse(threshold=badge.threshold, symbol=badge.symbol, label=badge.label)


def _overview_as_response(overview: StreakOverview) -> StreakOverviewResponse:
    return StreakOverviewResponse(
        current_streak=overview.current_streak,
        longest_streak=overview.longest_streak,
        status=overview.status,
        hours_remaining=round(overview.hours_remaining, 2),
        studied_today=overview.studied_today,
        stage=_stage_as_response(overview.stage),
    )


def _activity_as_response(result: StreakActivityResult) -> StreakActivityResponse:
    broken = result.broken_streak
    return StreakActivityResponse(
        counted_for_streak=result.counted_for_streak,
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
        status=result.status,
        broken_streak=(
            PastStreakResponse(
                streak_length=broken.streak_length,
                start_date=broken.start_date.isoformat() if broken.start_date else None,
                end_date=broken.end_date.isoformat() if broken.end_date else None,
            )
            if broken is not None
            else None
        ),
    )


def _gallery_as_response(view: GalleryView) -> GalleryResponse:
    return GalleryResponse(
        summary=GallerySummaryResponse(
            current=view.summary.current,
            longest=view.summary.longest,
            past_count=view.summary.past_count,
        ),
        badges=[_badge_as_response(badge) for badge in view.badges],
        entries=[
            GalleryEntryResponse(
                index=entry.index,
                stage=_stage_as_response(entry.stage),
                streak_length=entry.streak_length,
                is_selected=entry.is_selected,
                is_crowned=entry.is_crowned,
                formatted_range=entry.formatted_range,
            )
            for entry in view.entries
        ],
        message=GalleryMessageResponse(
            variant=view.message.variant,
            text=view.message.text,
            days_to_record=view.message.days_to_record,
        ),
        selected_index=view.selected_index,
    )


@router.get("", response_model=StreakOverviewResponse)
async def get_streak(request: Request) -> StreakOverviewResponse:
    user_id = _required_user_id(request)
    async with SessionLocal.begin() as session:
        overview = await StreakService.get_overview(
            session,
            user_id=user_id,
            now_utc=_utc_now(),
            policy=_policy(),
        )
    return _overview_as_response(overview)


@router.post("/activity", response_model=StreakActivityResponse)
async def record_streak_activity(request: Request) -> StreakActivityResponse:
    user_id = _required_user_id(request)
    async with SessionLocal.begin() as session:
        result = await StreakService.record_study(
            session,
            user_id=user_id,
            now_utc=_utc_now(),
            policy=_policy(),
        )
    return _activity_as_response(result)


@router.get("/gallery", response_model=GalleryResponse)
async def get_streak_gallery(
    request: Request,
    selected: int | None = Query(default=None, ge=0),
) -> GalleryResponse:
    user_id = _required_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            view = await StreakService.build_gallery(
                session,
                user_id=user_id,
                now_utc=_utc_now(),
                policy=_policy(),
                selected_index=selected,
            )
    except GallerySelectionError as exc:
        logger.info("streak_gallery_selection_rejected", user_id=user_id, selected=selected)
        raise HTTPException(status_code=400, detail={"code": "E_GALLERY_INDEX"}) from exc
    return _gallery_as_response(view)


@router.delete("", response_model=StreakOverviewResponse)
async def reset_streak(request: Request) -> StreakOverviewResponse:
    user_id = _required_user_id(request)
    async with SessionLocal.begin() as session:
        overview = await StreakService.reset(
            session,
            user_id=user_id,
            now_utc=_utc_now(),
            policy=_policy(),
        )
    return _overview_as_response(overview)
