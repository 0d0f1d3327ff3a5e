"""Scoreboard read and write operations.

Reads combine the raw match, frame and break rows into derived views. Writes
run through the mutation guard before anything is sent to the row store.
Routes should be thin wrappers around these functions.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional
from uuid import UUID

from app.models.fields import Player, coerce_player
from app.models.scoreboard import (
    BreakRead,
    FrameRead,
    MatchDetail,
    MatchSummary,
    SeasonOverview,
    SeasonStats,
)
from app.schemas.breaks import Break
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.active_frame_service import (
    find_active_frame,
    get_or_create_active_frame,
    next_frame_number,
    suggest_breaker,
)
from app.services.errors import NotFoundError, ValidationError
from app.services.match_service import is_match_full, match_frame_tally, match_winner
from app.services.mutation_guard import (
    ensure_frame_can_finalize,
    resolve_season,
    validate_best_of,
    validate_break_points,
    validate_new_frame,
    validate_scores,
)
from app.services.outcome_service import resolve_frame_winner, winner_from_scores
from app.services.row_store import RowStore
from app.services.season_stats_service import compute_season_stats

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


def to_frame_read(frame: Frame) -> FrameRead:
    return FrameRead(
        id=frame.id,
        match_id=frame.match_id,
        frame_no=frame.frame_no,
        score_a=frame.score_a,
        score_b=frame.score_b,
        winner=resolve_frame_winner(frame),
        breaker=coerce_player(frame.breaker),
        season=frame.season,
    )


def to_break_read(brk: Break) -> BreakRead:
    return BreakRead(
        id=brk.id,
        match_id=brk.match_id,
        frame_id=brk.frame_id,
        player=brk.player,
        points=brk.points,
        season=brk.season,
    )


def summarize_match(match: Match, frames: Iterable[Frame]) -> MatchSummary:
    """Build a MatchSummary with the derived tally and winner."""
    frames = list(frames)
    return MatchSummary(
        id=match.id,
        season=match.season,
        played_on=match.played_on,
        best_of=match.best_of,
        first_breaker=coerce_player(match.first_breaker),
        winner=match_winner(match, frames),
        notes=match.notes,
        tally=match_frame_tally(match, frames),
    )


def suggest_first_breaker(matches: Iterable[Match]) -> Optional[Player]:
    """Suggest who breaks first in the next match.

    The opponent of whoever broke first in the most recent match that has a
    first breaker recorded.
    """
    latest: Optional[Match] = None
    latest_first: Optional[Player] = None
    for match in matches:
        first = coerce_player(match.first_breaker)
        if first is None:
            continue
        if latest is None or (match.played_on, match.created_at) > (
            latest.played_on,
            latest.created_at,
        ):
            latest = match
            latest_first = first
    return latest_first.opponent if latest_first is not None else None


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def get_match(store: RowStore, match_id: UUID) -> Match:
    matches = await store.fetch_matches(match_id=match_id)
    if not matches:
        raise NotFoundError(f"Match {match_id} not found")
    return matches[0]


async def list_seasons(store: RowStore) -> list[int]:
    """Distinct seasons, newest first; the current year when nothing is recorded."""
    matches = await store.fetch_matches()
    seasons = sorted({m.season for m in matches}, reverse=True)
    return seasons or [date.today().year]


async def list_matches(store: RowStore, season: int) -> list[MatchSummary]:
    """Matches of ``season``, most recent first, with derived tally and winner."""
    matches = await store.fetch_matches(season=season)
    frames = await store.fetch_frames(season=season)
    return [summarize_match(m, frames) for m in matches if m.season == season]


async def get_season_stats(store: RowStore, season: int) -> SeasonStats:
    matches = await store.fetch_matches(season=season)
    frames = await store.fetch_frames(season=season)
    breaks = await store.fetch_breaks(season=season)
    return compute_season_stats(matches, frames, breaks, season=season)


async def get_season_overview(store: RowStore, season: int) -> SeasonOverview:
    """Season stats and match list from a single fetch of each collection."""
    matches = [m for m in await store.fetch_matches(season=season) if m.season == season]
    frames = await store.fetch_frames(season=season)
    breaks = await store.fetch_breaks(season=season)
    return SeasonOverview(
        season=season,
        stats=compute_season_stats(matches, frames, breaks, season=season),
        matches=[summarize_match(m, frames) for m in matches],
        next_first_breaker=suggest_first_breaker(matches),
    )


async def get_match_detail(store: RowStore, match_id: UUID) -> MatchDetail:
    match = await get_match(store, match_id)
    frames = await store.fetch_frames(match_id=match_id)
    breaks = await store.fetch_breaks(match_id=match_id)

    active = find_active_frame(frames)
    next_no = next_frame_number(frames)
    breaker_for = active.frame_no if active is not None else next_no
    return MatchDetail(
        match=summarize_match(match, frames),
        frames=[to_frame_read(f) for f in sorted(frames, key=lambda f: f.frame_no)],
        breaks=[to_break_read(b) for b in sorted(breaks, key=lambda b: -b.points)],
        active_frame=to_frame_read(active) if active is not None else None,
        next_frame_no=next_no,
        suggested_breaker=suggest_breaker(match, breaker_for),
        is_complete=is_match_full(match, frames),
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def create_match(
    store: RowStore,
    *,
    played_on: Optional[date],
    best_of: int,
    season: Optional[int] = None,
    first_breaker: Optional[Player] = None,
    notes: Optional[str] = None,
) -> Match:
    validate_best_of(best_of)
    resolved_season = resolve_season(played_on, season)
    match = Match(
        season=resolved_season,
        played_on=played_on,
        best_of=best_of,
        first_breaker=first_breaker,
        notes=(notes or "").strip() or None,
        created_at=datetime.utcnow(),
    )
    created = await store.insert_match(match)
    logger.info(f"Created match {created.id} (season {resolved_season}, best of {best_of})")
    return created


async def create_frame(
    store: RowStore,
    *,
    match_id: UUID,
    frame_no: Optional[int],
    score_a: int,
    score_b: int,
    breaker: Optional[Player] = None,
) -> Frame:
    """Create a frame at an explicit (or the next free) frame number.

    Raises:
        ValidationError: Bad scores/number or the match is already full
        ConflictError: ``frame_no`` is already taken
    """
    match = await get_match(store, match_id)
    frames = await store.fetch_frames(match_id=match_id)
    if frame_no is None:
        frame_no = next_frame_number(frames)
    validate_new_frame(match, frames, frame_no, score_a, score_b)

    frame = Frame(
        match_id=match.id,
        frame_no=frame_no,
        score_a=score_a,
        score_b=score_b,
        breaker=breaker,
        season=match.season,
    )
    created = await store.insert_frame(frame)
    logger.info(f"Created frame {frame_no} for match {match_id} ({score_a}-{score_b})")
    return created


async def get_frame(store: RowStore, frame_id: UUID) -> Frame:
    frames = await store.fetch_frames(frame_id=frame_id)
    if not frames:
        raise NotFoundError(f"Frame {frame_id} not found")
    return frames[0]


async def update_frame(
    store: RowStore,
    *,
    frame_id: UUID,
    score_a: int,
    score_b: int,
    breaker: Optional[Player] = None,
    winner: Optional[Player] = None,
) -> Frame:
    """Edit frame scores; the stored winner is recomputed from the scores.

    Passing ``winner`` stores that value instead, as an explicit override.

    Raises:
        ValidationError: Negative scores, or the edit would decide a frame in
            a match that is already complete
        NotFoundError: Unknown frame
    """
    validate_scores(score_a, score_b)
    frame = await get_frame(store, frame_id)
    match = await get_match(store, frame.match_id)
    frames = await store.fetch_frames(match_id=match.id)

    new_winner = winner if winner is not None else winner_from_scores(score_a, score_b)
    ensure_frame_can_finalize(match, frames, frame, new_winner)

    values = {
        "score_a": score_a,
        "score_b": score_b,
        "breaker": breaker,
        "winner": new_winner,
    }
    updated = await store.update_frame(frame_id, values)
    logger.info(f"Updated frame {frame_id} to {score_a}-{score_b}")
    return updated


async def _resolve_break_frame(
    store: RowStore,
    match: Match,
    frame_id: Optional[UUID],
    frame_no: Optional[int],
) -> Optional[UUID]:
    frames = await store.fetch_frames(match_id=match.id)

    if frame_id is not None:
        if not any(f.id == frame_id for f in frames):
            raise ValidationError(f"Frame {frame_id} does not belong to match {match.id}")
        return frame_id

    if frame_no is not None:
        target = next((f for f in frames if f.frame_no == frame_no), None)
        if target is None:
            logger.warning(
                f"No frame {frame_no} in match {match.id}; recording break against the match"
            )
            return None
        return target.id

    active = find_active_frame(frames)
    if active is not None:
        return active.id
    if is_match_full(match, frames):
        return None
    created = await get_or_create_active_frame(store, match.id)
    return created.id


async def create_break(
    store: RowStore,
    *,
    match_id: UUID,
    player: Player,
    points: int,
    frame_id: Optional[UUID] = None,
    frame_no: Optional[int] = None,
) -> Break:
    """Record a 10+ break.

    Without an explicit frame the break goes to the active frame, which is
    created when the match has none yet.
    """
    validate_break_points(points)
    match = await get_match(store, match_id)
    target_frame_id = await _resolve_break_frame(store, match, frame_id, frame_no)

    brk = Break(
        match_id=match.id,
        frame_id=target_frame_id,
        player=player,
        points=points,
        season=match.season,
        created_at=datetime.utcnow(),
    )
    created = await store.insert_break(brk)
    logger.info(f"Recorded {points} break for {player.value} in match {match_id}")
    return created


async def update_break(store: RowStore, *, break_id: UUID, points: int) -> Break:
    """Correct a break's point value; player, match and frame stay fixed."""
    validate_break_points(points)
    updated = await store.update_break(break_id, {"points": points})
    logger.info(f"Updated break {break_id} to {points}")
    return updated
