"""Validation applied before any write reaches the row store."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from app.models.fields import BEST_OF_CHOICES, BREAK_THRESHOLD, Player
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.errors import ConflictError, ValidationError
from app.services.match_service import is_match_full
from app.services.outcome_service import is_frame_decided


def validate_best_of(best_of: int) -> int:
    if best_of not in BEST_OF_CHOICES:
        raise ValidationError(
            f"best_of must be one of {', '.join(str(b) for b in BEST_OF_CHOICES)}"
        )
    return best_of


def resolve_season(played_on: Optional[date], season: Optional[int] = None) -> int:
    """Validate the match date and return its season.

    The season is the date's year unless explicitly overridden.
    """
    if played_on is None:
        raise ValidationError("A match requires a date")
    if season is not None:
        return season
    return played_on.year


def validate_break_points(points: int) -> int:
    if points < BREAK_THRESHOLD:
        raise ValidationError(f"A break must be at least {BREAK_THRESHOLD} points")
    return points


def validate_scores(score_a: int, score_b: int) -> None:
    if score_a < 0 or score_b < 0:
        raise ValidationError("Frame scores cannot be negative")


def validate_frame_no(frame_no: int) -> int:
    if frame_no < 1:
        raise ValidationError("Frame numbers start at 1")
    return frame_no


def ensure_frame_capacity(match: Match, frames: Iterable[Frame]) -> None:
    """Reject new frames once the match is complete.

    A match is complete with best_of decided frames, or as a compact best-of-3
    entry.
    """
    if is_match_full(match, frames):
        raise ValidationError(f"Match is already complete (best of {match.best_of})")


def ensure_frame_can_finalize(
    match: Match,
    frames: Iterable[Frame],
    frame: Frame,
    winner: Optional[Player],
) -> None:
    """Reject an edit that decides an open frame of an already complete match.

    ``winner`` is the frame's winner after the edit. Edits to frames that are
    already decided, or that leave the frame open, never change the count.
    """
    if winner is None or is_frame_decided(frame):
        return
    ensure_frame_capacity(match, [f for f in frames if f.id != frame.id])


def ensure_frame_no_free(match: Match, frames: Iterable[Frame], frame_no: int) -> None:
    """Raise ConflictError when ``frame_no`` is already taken in ``match``."""
    if any(f.frame_no == frame_no and f.match_id == match.id for f in frames):
        raise ConflictError(match.id, frame_no)


def validate_new_frame(
    match: Match,
    frames: Iterable[Frame],
    frame_no: int,
    score_a: int,
    score_b: int,
) -> None:
    """Run every check that applies to creating a frame in ``match``."""
    frames = list(frames)
    validate_frame_no(frame_no)
    validate_scores(score_a, score_b)
    ensure_frame_capacity(match, frames)
    ensure_frame_no_free(match, frames, frame_no)
