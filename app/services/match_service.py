"""Per-match aggregation: frame tally and match winner."""

from __future__ import annotations

from typing import Iterable, Optional

from app.models.fields import Player, coerce_player
from app.models.scoreboard import FrameTally
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.outcome_service import resolve_frame_winner

# Compact best-of-3 entries store the whole mini-match as one "frame" whose
# two scores are the frames won (2-1 or 1-2).
COMPACT_BEST_OF = 3
COMPACT_FRAME_TOTAL = 3


def tally_frames(frames: Iterable[Frame]) -> FrameTally:
    """Count resolved frame winners per player; undecided frames count for nobody."""
    player_a = 0
    player_b = 0
    for frame in frames:
        winner = resolve_frame_winner(frame)
        if winner is Player.player_a:
            player_a += 1
        elif winner is Player.player_b:
            player_b += 1
    return FrameTally(player_a=player_a, player_b=player_b)


def match_frame_tally(match: Match, frames: Iterable[Frame]) -> FrameTally:
    """Return the frame tally for ``match``.

    Frames belonging to other matches are ignored, so callers may pass an
    unfiltered season-wide list.
    """
    return tally_frames(f for f in frames if f.match_id == match.id)


def implicit_best_of_three_winner(
    match: Match, frames: Iterable[Frame]
) -> Optional[Player]:
    """Winner of a legacy compact best-of-3 entry, if ``match`` is one.

    Fires only for a best-of-3 match without an explicit winner that holds
    exactly one frame, with no winner field, scored 2-1 or 1-2.
    """
    if match.best_of != COMPACT_BEST_OF or coerce_player(match.winner) is not None:
        return None
    own = [f for f in frames if f.match_id == match.id]
    if len(own) != 1:
        return None
    frame = own[0]
    if coerce_player(frame.winner) is not None:
        return None
    if frame.score_a + frame.score_b != COMPACT_FRAME_TOTAL:
        return None
    # 3-0 cannot happen in a best of 3
    if 0 in (frame.score_a, frame.score_b):
        return None
    return Player.player_a if frame.score_a > frame.score_b else Player.player_b


def match_winner(match: Match, frames: Iterable[Frame]) -> Optional[Player]:
    """Return the match winner.

    The explicit winner field first, otherwise the strict frame-tally leader.
    A level tally gives None. A compact best-of-3 entry needs no special case:
    its lone frame already resolves to the higher scorer.
    """
    explicit = coerce_player(match.winner)
    if explicit is not None:
        return explicit
    return match_frame_tally(match, frames).leader


def is_match_full(match: Match, frames: Iterable[Frame]) -> bool:
    """True once ``best_of`` frames of the match have a determinable winner.

    A compact best-of-3 entry stands for the whole match, so it is full as
    soon as it is recorded.
    """
    frames = list(frames)
    if implicit_best_of_three_winner(match, frames) is not None:
        return True
    return match_frame_tally(match, frames).decided >= match.best_of
