"""RowStore backed by the async SQLAlchemy session."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.breaks import Break
from app.schemas.frames import Frame
from app.schemas.matches import Match
from app.services.errors import ConflictError, NotFoundError, TransportError

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION_SQLSTATE = "23505"
_UNIQUE_VIOLATION_MARKERS = (
    "duplicate key",
    "UNIQUE constraint failed",
    "uq_frames_match_frame_no",
)


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Return True when the integrity error is a unique-key collision."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(exc)
    return any(marker in text for marker in _UNIQUE_VIOLATION_MARKERS)


@contextmanager
def _backend_faults() -> Iterator[None]:
    """Translate connectivity failures into TransportError."""
    try:
        yield
    except (OperationalError, InterfaceError, OSError) as exc:
        logger.error(f"Row store unavailable: {exc}")
        raise TransportError(str(exc)) from exc


class SqlRowStore:
    """Row store over a request-scoped AsyncSession.

    Writes only flush; the transaction is owned by whoever opened the session
    (see ``get_session``).
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def fetch_matches(
        self, *, season: Optional[int] = None, match_id: Optional[UUID] = None
    ) -> list[Match]:
        stmt = select(Match)
        if season is not None:
            stmt = stmt.where(Match.season == season)  # type: ignore[arg-type]
        if match_id is not None:
            stmt = stmt.where(Match.id == match_id)  # type: ignore[arg-type]
        stmt = stmt.order_by(
            Match.played_on.desc(),  # type: ignore[attr-defined]
            Match.created_at.desc(),  # type: ignore[attr-defined]
        )
        with _backend_faults():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def fetch_frames(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_no: Optional[int] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Frame]:
        stmt = select(Frame)
        if season is not None:
            stmt = stmt.where(Frame.season == season)  # type: ignore[arg-type]
        if match_id is not None:
            stmt = stmt.where(Frame.match_id == match_id)  # type: ignore[arg-type]
        if frame_no is not None:
            stmt = stmt.where(Frame.frame_no == frame_no)  # type: ignore[arg-type]
        if frame_id is not None:
            stmt = stmt.where(Frame.id == frame_id)  # type: ignore[arg-type]
        stmt = stmt.order_by(Frame.match_id, Frame.frame_no)  # type: ignore[arg-type]
        with _backend_faults():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def fetch_breaks(
        self,
        *,
        season: Optional[int] = None,
        match_id: Optional[UUID] = None,
        frame_id: Optional[UUID] = None,
    ) -> list[Break]:
        stmt = select(Break)
        if season is not None:
            stmt = stmt.where(Break.season == season)  # type: ignore[arg-type]
        if match_id is not None:
            stmt = stmt.where(Break.match_id == match_id)  # type: ignore[arg-type]
        if frame_id is not None:
            stmt = stmt.where(Break.frame_id == frame_id)  # type: ignore[arg-type]
        stmt = stmt.order_by(Break.points.desc())  # type: ignore[attr-defined]
        with _backend_faults():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def insert_match(self, match: Match) -> Match:
        with _backend_faults():
            self.db.add(match)
            await self.db.flush()
        return match

    async def insert_frame(self, frame: Frame) -> Frame:
        """Insert a frame inside a savepoint.

        A unique-key collision only rolls back the savepoint, so the caller can
        keep using the session to re-fetch the conflicting frame.
        """
        try:
            with _backend_faults():
                async with self.db.begin_nested():
                    self.db.add(frame)
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise ConflictError(frame.match_id, frame.frame_no) from exc
            raise
        return frame

    async def insert_break(self, brk: Break) -> Break:
        with _backend_faults():
            self.db.add(brk)
            await self.db.flush()
        return brk

    async def update_frame(self, frame_id: UUID, values: dict[str, Any]) -> Frame:
        with _backend_faults():
            frame = await self.db.get(Frame, frame_id)
            if frame is None:
                raise NotFoundError(f"Frame {frame_id} not found")
            for key, value in values.items():
                setattr(frame, key, value)
            await self.db.flush()
        return frame

    async def update_break(self, break_id: UUID, values: dict[str, Any]) -> Break:
        with _backend_faults():
            brk = await self.db.get(Break, break_id)
            if brk is None:
                raise NotFoundError(f"Break {break_id} not found")
            for key, value in values.items():
                setattr(brk, key, value)
            await self.db.flush()
        return brk
