"""In-memory row store and row builders for service tests."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from app.models.fields import Player
from app.schemas.breaks import Break
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.errors import ConflictError, NotFoundError


def make_match(
    *,
    best_of: int = 3,
    season: int = 2025,
    played_on: date = date(2025, 3, 1),
    first_breaker: Optional[Player] = None,
    winner: Optional[Player] = None,
    created_at: Optional[datetime] = None,
) -> Match:
    return Match(
        season=season,
        played_on=played_on,
        best_of=best_of,
        first_breaker=first_breaker,
        winner=winner,
        created_at=created_at or datetime(2025, 1, 1),
    )


def make_frame(
    match: Match,
    frame_no: int,
    score_a: int = 0,
    score_b: int = 0,
    winner: Optional[Player] = None,
) -> Frame:
    return Frame(
        match_id=match.id,
        frame_no=frame_no,
        score_a=score_a,
        score_b=score_b,
        winner=winner,
        season=match.season,
    )


def make_break(
    match: Match, player: Player, points: int, frame: Optional[Frame] = None
) -> Break:
    return Break(
        match_id=match.id,
        frame_id=frame.id if frame is not None else None,
        player=player,
        points=points,
        season=match.season,
    )


class InMemoryRowStore:
    """RowStore fake with the same ordering and conflict behaviour as SqlRowStore.

    Every operation yields to the event loop once, so concurrent callers
    interleave the way they would against a real backend.
    """

    def __init__(self) -> None:
        self.matches: dict[UUID, Match] = {}
        self.frames: dict[UUID, Frame] = {}
        self.breaks: dict[UUID, Break] = {}
        self.frame_inserts = 0
        self.fail_with: Optional[Exception] = None

    async def _tick(self) -> None:
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with

    def add(self, *rows: Any) -> None:
        """Seed rows directly, bypassing validation."""
        for row in rows:
            if isinstance(row, Match):
                self.matches[row.id] = row
            elif isinstance(row, Frame):
                self.frames[row.id] = row
            elif isinstance(row, Break):
                self.breaks[row.id] = row

    async def fetch_matches(
        self, *, season: Optional[int] = None, match_id: Optional[UUID] = None
    ) -> list[Match]:
        await self._tick()
        rows = [
            m
            for m in self.matches.values()
            if (season is None or m.season == season)
            and (match_id is None or m.id == match_id)
        ]
        return sorted(rows, key=lambda m: (m.played_on, m.created_at), reverse=True)

    async def fetch_frames(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_no: Optional[int] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Frame]:
        await self._tick()
        rows = [
            f
            for f in self.frames.values()
            if (season is None or f.season == season)
            and (match_id is None or f.match_id == match_id)
            and (frame_no is None or f.frame_no == frame_no)
            and (frame_id is None or f.id == frame_id)
        ]
        return sorted(rows, key=lambda f: f.frame_no)

    async def fetch_breaks(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Break]:
        await self._tick()
        rows = [
            b
            for b in self.breaks.values()
            if (season is None or b.season == season)
            and (match_id is None or b.match_id == match_id)
            and (frame_id is None or b.frame_id == frame_id)
        ]
        return sorted(rows, key=lambda b: b.points, reverse=True)

    async def insert_match(self, match: Match) -> Match:
        await self._tick()
        self.matches[match.id] = match
        return match

    async def insert_frame(self, frame: Frame) -> Frame:
        await self._tick()
        self.frame_inserts += 1
        if any(
            f.match_id == frame.match_id and f.frame_no == frame.frame_no
            for f in self.frames.values()
        ):
            raise ConflictError(frame.match_id, frame.frame_no)
        self.frames[frame.id] = frame
        return frame

    async def insert_break(self, brk: Break) -> Break:
        await self._tick()
        self.breaks[brk.id] = brk
        return brk

    async def update_frame(self, frame_id: UUID, values: dict[str, Any]) -> Frame:
        await self._tick()
        frame = self.frames.get(frame_id)
        if frame is None:
            raise NotFoundError(f"Frame {frame_id} not found")
        for key, value in values.items():
            setattr(frame, key, value)
        return frame

    async def update_break(self, break_id: UUID, values: dict[str, Any]) -> Break:
        await self._tick()
        brk = self.breaks.get(break_id)
        if brk is None:
            raise NotFoundError(f"Break {break_id} not found")
        for key, value in values.items():
            setattr(brk, key, value)
        return brk
