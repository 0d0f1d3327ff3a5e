"""Row store interface consumed by the scoreboard services.

The services only need fetch-by-filter, insert and update. Keeping the
capability set this small lets tests run the services against an in-memory
store with no database.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol
from uuid import UUID

from app.schemas.breaks import Break
from app.schemas.frames import Frame
from app.schemas.matches import Match


class RowStore(Protocol):
    """Persistence capabilities for matches, frames and breaks.

    Implementations raise ``ConflictError`` when a frame insert collides on
    (match_id, frame_no), ``NotFoundError`` for unknown ids on update, and
    ``TransportError`` when the backend is unreachable.
    """

    async def fetch_matches(
        self, *, season: Optional[int] = None, match_id: Optional[UUID] = None
    ) -> list[Match]:
        """Return matches ordered by date, most recent first."""
        ...

    async def fetch_frames(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_no: Optional[int] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Frame]:
        """Return frames ordered by frame number."""
        ...

    async def fetch_breaks(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Break]:
        """Return breaks ordered by points, highest first."""
        ...

    async def insert_match(self, match: Match) -> Match:
        ...

    async def insert_frame(self, frame: Frame) -> Frame:
        ...

    async def insert_break(self, brk: Break) -> Break:
        ...

    async def update_frame(self, frame_id: UUID, values: dict[str, Any]) -> Frame:
        ...

    async def update_break(self, break_id: UUID, values: dict[str, Any]) -> Break:
        ...
