"""Active-frame tracking for a match.

The active frame is derived from the frame collection on every read rather
than stored, so it cannot go stale after a concurrent edit.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from uuid import UUID

from app.models.fields import Player, coerce_player
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.errors import ConflictError, NotFoundError
from app.services.mutation_guard import ensure_frame_capacity
from app.services.outcome_service import is_frame_decided
from app.services.row_store import RowStore

logger = logging.getLogger(__name__)


def _ordered(frames: Iterable[Frame]) -> list[Frame]:
    return sorted(frames, key=lambda f: f.frame_no)


def find_active_frame(frames: Iterable[Frame]) -> Optional[Frame]:
    """Return the highest-numbered undecided frame, or None.

    Lower-numbered frames are not required to be decided; skipped or
    placeholder frames are tolerated.
    """
    for frame in reversed(_ordered(frames)):
        if not is_frame_decided(frame):
            return frame
    return None


def next_frame_number(frames: Iterable[Frame]) -> int:
    numbers = [f.frame_no for f in frames]
    return max(numbers) + 1 if numbers else 1


def suggest_breaker(match: Match, frame_no: int) -> Optional[Player]:
    """Suggest who breaks off in ``frame_no``.

    Players alternate: the match's first breaker takes the odd frames.
    """
    first = coerce_player(match.first_breaker)
    if first is None:
        return None
    return first if frame_no % 2 == 1 else first.opponent


async def _get_match(store: RowStore, match_id: UUID) -> Match:
    matches = await store.fetch_matches(match_id=match_id)
    if not matches:
        raise NotFoundError(f"Match {match_id} not found")
    return matches[0]


async def get_or_create_active_frame(store: RowStore, match_id: UUID) -> Frame:
    """Return the match's active frame, creating a 0-0 placeholder if needed.

    Safe to call repeatedly: when the placeholder insert collides with a
    concurrent writer on the same frame number, the frame at that number is
    re-fetched once and returned instead of creating another one.

    Raises:
        NotFoundError: Unknown match
        ValidationError: The match already holds best_of decided frames
    """
    match = await _get_match(store, match_id)
    frames = await store.fetch_frames(match_id=match_id)

    active = find_active_frame(frames)
    if active is not None:
        return active

    ensure_frame_capacity(match, frames)
    frame_no = next_frame_number(frames)
    placeholder = Frame(
        match_id=match.id,
        frame_no=frame_no,
        score_a=0,
        score_b=0,
        season=match.season,
    )
    try:
        created = await store.insert_frame(placeholder)
    except ConflictError:
        logger.info(
            f"Frame {frame_no} of match {match_id} created concurrently; re-fetching"
        )
        existing = await store.fetch_frames(match_id=match_id, frame_no=frame_no)
        if not existing:
            raise
        return existing[0]

    logger.info(f"Created placeholder frame {frame_no} for match {match_id}")
    return created
