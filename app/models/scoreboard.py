"""Pydantic request/response models for the scoreboard API."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.fields import Player


class FrameTally(BaseModel):
    """Frames won per player within one match."""

    player_a: int = 0
    player_b: int = 0

    def for_player(self, player: Player) -> int:
        return self.player_a if player is Player.player_a else self.player_b

    @property
    def leader(self) -> Optional[Player]:
        """Player with strictly more frames, None on a tie."""
        if self.player_a > self.player_b:
            return Player.player_a
        if self.player_b > self.player_a:
            return Player.player_b
        return None

    @property
    def decided(self) -> int:
        return self.player_a + self.player_b


class PlayerMetrics(BaseModel):
    matches: int = 0
    frames: int = 0
    highest_break: int = 0
    ten_plus_breaks: int = 0


class SeasonStats(BaseModel):
    season: Optional[int] = Field(default=None)
    player_a: PlayerMetrics = Field(default_factory=PlayerMetrics)
    player_b: PlayerMetrics = Field(default_factory=PlayerMetrics)

    def for_player(self, player: Player) -> PlayerMetrics:
        return self.player_a if player is Player.player_a else self.player_b


class PlayerRead(BaseModel):
    id: Player
    name: str


class FrameRead(BaseModel):
    id: UUID
    match_id: UUID
    frame_no: int
    score_a: int
    score_b: int
    winner: Optional[Player] = Field(
        default=None, description="Resolved winner (explicit field or score comparison)"
    )
    breaker: Optional[Player] = Field(default=None)
    season: int


class BreakRead(BaseModel):
    id: UUID
    match_id: UUID
    frame_id: Optional[UUID] = Field(default=None)
    player: Player
    points: int
    season: int


class MatchSummary(BaseModel):
    id: UUID
    season: int
    played_on: date
    best_of: int
    first_breaker: Optional[Player] = Field(default=None)
    winner: Optional[Player] = Field(
        default=None, description="Explicit winner if set, otherwise derived"
    )
    notes: Optional[str] = Field(default=None)
    tally: FrameTally = Field(default_factory=FrameTally)


class MatchDetail(BaseModel):
    match: MatchSummary
    frames: list[FrameRead] = Field(default_factory=list)
    breaks: list[BreakRead] = Field(default_factory=list)
    active_frame: Optional[FrameRead] = Field(default=None)
    next_frame_no: int = 1
    suggested_breaker: Optional[Player] = Field(default=None)
    is_complete: bool = Field(
        default=False, description="True once best_of frames have a winner"
    )


class SeasonOverview(BaseModel):
    season: int
    stats: SeasonStats
    matches: list[MatchSummary] = Field(default_factory=list)
    next_first_breaker: Optional[Player] = Field(default=None)


class MatchCreate(BaseModel):
    played_on: date
    best_of: int = 3
    season: Optional[int] = Field(default=None, description="Defaults to played_on.year")
    first_breaker: Optional[Player] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class FrameCreate(BaseModel):
    frame_no: Optional[int] = Field(
        default=None, description="Defaults to the next free frame number"
    )
    score_a: int = 0
    score_b: int = 0
    breaker: Optional[Player] = Field(default=None)


class FrameUpdate(BaseModel):
    score_a: int
    score_b: int
    breaker: Optional[Player] = Field(default=None)
    winner: Optional[Player] = Field(
        default=None, description="Explicit override; recomputed from scores when omitted"
    )


class BreakCreate(BaseModel):
    player: Player
    points: int
    frame_id: Optional[UUID] = Field(default=None)
    frame_no: Optional[int] = Field(default=None)


class BreakUpdate(BaseModel):
    points: int
