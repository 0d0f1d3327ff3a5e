"""Season-level statistics per player.

Every metric is a commutative aggregation, so the result does not depend on
the order in which matches, frames and breaks arrive.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from app.models.fields import BREAK_THRESHOLD, Player, coerce_player
from app.models.scoreboard import PlayerMetrics, SeasonStats
from app.schemas.breaks import Break
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.match_service import tally_frames
from app.services.outcome_service import resolve_frame_winner


def _group_frames(frames: Iterable[Frame]) -> Dict[UUID, List[Frame]]:
    grouped: Dict[UUID, List[Frame]] = defaultdict(list)
    for frame in frames:
        grouped[frame.match_id].append(frame)
    return grouped


def compute_season_stats(
    matches: Iterable[Match],
    frames: Iterable[Frame],
    breaks: Iterable[Break],
    season: Optional[int] = None,
) -> SeasonStats:
    """Aggregate match wins, frame wins and 10+ breaks per player.

    Args:
        matches: Matches of the season
        frames: Frames of the season (any match, any order)
        breaks: Breaks of the season
        season: Season label copied onto the result

    Returns:
        SeasonStats with a complete PlayerMetrics for both players; absent
        data yields zeros.
    """
    matches = list(matches)
    frames = list(frames)
    frames_by_match = _group_frames(frames)

    # One credit per match; a compact best-of-3 entry earns its win through
    # its lone frame here.
    match_wins = {Player.player_a: 0, Player.player_b: 0}

    for match in matches:
        winner = coerce_player(match.winner)
        if winner is None:
            winner = tally_frames(frames_by_match.get(match.id, [])).leader
        if winner is not None:
            match_wins[winner] += 1

    frame_wins = {Player.player_a: 0, Player.player_b: 0}
    for frame in frames:
        winner = resolve_frame_winner(frame)
        if winner is not None:
            frame_wins[winner] += 1

    highest = {Player.player_a: 0, Player.player_b: 0}
    ten_plus = {Player.player_a: 0, Player.player_b: 0}
    for brk in breaks:
        player = coerce_player(brk.player)
        if player is None or brk.points < BREAK_THRESHOLD:
            continue
        ten_plus[player] += 1
        highest[player] = max(highest[player], brk.points)

    def _metrics(player: Player) -> PlayerMetrics:
        return PlayerMetrics(
            matches=match_wins[player],
            frames=frame_wins[player],
            highest_break=highest[player],
            ten_plus_breaks=ten_plus[player],
        )

    return SeasonStats(
        season=season,
        player_a=_metrics(Player.player_a),
        player_b=_metrics(Player.player_b),
    )
