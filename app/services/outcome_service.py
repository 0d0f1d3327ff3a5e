"""Frame outcome resolution.

A frame can be finalized either by assigning its winner directly or by score
entry alone. The explicit winner always takes precedence, so a manual
correction can override the naive score comparison.
"""

from __future__ import annotations

from typing import Optional

from app.models.fields import Player, coerce_player
from app.schemas.frames import Frame


def winner_from_scores(score_a: int, score_b: int) -> Optional[Player]:
    """Return the higher-scoring player, or None when the scores are level."""
    if score_a == score_b:
        return None
    return Player.player_a if score_a > score_b else Player.player_b


def resolve_frame_winner(frame: Frame) -> Optional[Player]:
    """Return who won ``frame``, or None while it is undecided.

    Args:
        frame: Frame row (only ``winner``, ``score_a`` and ``score_b`` are read)

    Returns:
        The explicit winner when set to a valid player, otherwise the result of
        comparing the two scores. 0-0 and other level scores give None.
    """
    explicit = coerce_player(frame.winner)
    if explicit is not None:
        return explicit
    return winner_from_scores(frame.score_a, frame.score_b)


def is_frame_decided(frame: Frame) -> bool:
    return resolve_frame_winner(frame) is not None
