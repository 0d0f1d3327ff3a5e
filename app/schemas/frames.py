"""Frames table: per-frame scores within a match."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.fields import Player


class Frame(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "frames"
    __table_args__ = (
        # Frame numbers never repeat within a match
        UniqueConstraint("match_id", "frame_no", name="uq_frames_match_frame_no"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    match_id: UUID = Field(foreign_key="matches.id", index=True)
    frame_no: int
    score_a: int = Field(default=0)
    score_b: int = Field(default=0)
    winner: Optional[Player] = Field(default=None)
    breaker: Optional[Player] = Field(default=None)
    season: int = Field(index=True)
