"""Scoreboard API routes.

Provides endpoints for:
- Seasons, season stats and match lists
- Match detail with the derived active frame
- Adding and correcting matches, frames and 10+ breaks
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.fields import Player
from app.models.scoreboard import (
    BreakCreate,
    BreakRead,
    BreakUpdate,
    FrameCreate,
    FrameRead,
    FrameUpdate,
    MatchCreate,
    MatchDetail,
    MatchSummary,
    PlayerRead,
    SeasonOverview,
    SeasonStats,
)
from app.services import scoreboard_service
from app.services.active_frame_service import get_or_create_active_frame
from app.services.errors import (
    ConflictError,
    NotFoundError,
    ScoreboardError,
    TransportError,
    ValidationError,
)
from app.services.sql_row_store import SqlRowStore
from app.utils.db_async import get_session

router = APIRouter(prefix="/api", tags=["scoreboard"])


def get_store(db: AsyncSession = Depends(get_session)) -> SqlRowStore:
    return SqlRowStore(db)


def _to_http(exc: ScoreboardError) -> HTTPException:
    """Map service errors onto HTTP status codes."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(
            status_code=409,
            detail=f"Frame number {exc.frame_no} already exists for this match",
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, TransportError):
        return HTTPException(status_code=503, detail="Score storage is unavailable")
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/players", response_model=list[PlayerRead])
async def list_players() -> list[PlayerRead]:
    return [
        PlayerRead(id=Player.player_a, name=settings.player_a_name),
        PlayerRead(id=Player.player_b, name=settings.player_b_name),
    ]


@router.get("/seasons", response_model=list[int])
async def list_seasons(store: SqlRowStore = Depends(get_store)) -> list[int]:
    try:
        return await scoreboard_service.list_seasons(store)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc


@router.get("/seasons/{season}", response_model=SeasonOverview)
async def season_overview(
    season: int, store: SqlRowStore = Depends(get_store)
) -> SeasonOverview:
    """Season stats, match list and the suggested first breaker in one call."""
    try:
        return await scoreboard_service.get_season_overview(store, season)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc


@router.get("/seasons/{season}/stats", response_model=SeasonStats)
async def season_stats(season: int, store: SqlRowStore = Depends(get_store)) -> SeasonStats:
    try:
        return await scoreboard_service.get_season_stats(store, season)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc


@router.get("/matches", response_model=list[MatchSummary])
async def list_matches(
    season: int = Query(..., description="Season year"),
    store: SqlRowStore = Depends(get_store),
) -> list[MatchSummary]:
    try:
        return await scoreboard_service.list_matches(store, season)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc


@router.post("/matches", response_model=MatchSummary, status_code=201)
async def create_match(
    payload: MatchCreate, store: SqlRowStore = Depends(get_store)
) -> MatchSummary:
    try:
        match = await scoreboard_service.create_match(
            store,
            played_on=payload.played_on,
            best_of=payload.best_of,
            season=payload.season,
            first_breaker=payload.first_breaker,
            notes=payload.notes,
        )
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.summarize_match(match, [])


@router.get("/matches/{match_id}", response_model=MatchDetail)
async def match_detail(match_id: UUID, store: SqlRowStore = Depends(get_store)) -> MatchDetail:
    try:
        return await scoreboard_service.get_match_detail(store, match_id)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc


@router.post("/matches/{match_id}/frames", response_model=FrameRead, status_code=201)
async def create_frame(
    match_id: UUID, payload: FrameCreate, store: SqlRowStore = Depends(get_store)
) -> FrameRead:
    try:
        frame = await scoreboard_service.create_frame(
            store,
            match_id=match_id,
            frame_no=payload.frame_no,
            score_a=payload.score_a,
            score_b=payload.score_b,
            breaker=payload.breaker,
        )
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.to_frame_read(frame)


@router.post("/matches/{match_id}/active-frame", response_model=FrameRead)
async def active_frame(match_id: UUID, store: SqlRowStore = Depends(get_store)) -> FrameRead:
    """Return the active frame, creating a 0-0 placeholder when there is none."""
    try:
        frame = await get_or_create_active_frame(store, match_id)
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.to_frame_read(frame)


@router.patch("/frames/{frame_id}", response_model=FrameRead)
async def update_frame(
    frame_id: UUID, payload: FrameUpdate, store: SqlRowStore = Depends(get_store)
) -> FrameRead:
    try:
        frame = await scoreboard_service.update_frame(
            store,
            frame_id=frame_id,
            score_a=payload.score_a,
            score_b=payload.score_b,
            breaker=payload.breaker,
            winner=payload.winner,
        )
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.to_frame_read(frame)


@router.post("/matches/{match_id}/breaks", response_model=BreakRead, status_code=201)
async def create_break(
    match_id: UUID, payload: BreakCreate, store: SqlRowStore = Depends(get_store)
) -> BreakRead:
    try:
        brk = await scoreboard_service.create_break(
            store,
            match_id=match_id,
            player=payload.player,
            points=payload.points,
            frame_id=payload.frame_id,
            frame_no=payload.frame_no,
        )
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.to_break_read(brk)


@router.patch("/breaks/{break_id}", response_model=BreakRead)
async def update_break(
    break_id: UUID, payload: BreakUpdate, store: SqlRowStore = Depends(get_store)
) -> BreakRead:
    try:
        brk = await scoreboard_service.update_break(
            store, break_id=break_id, points=payload.points
        )
    except ScoreboardError as exc:
        raise _to_http(exc) from exc
    return scoreboard_service.to_break_read(brk)
