"""Breaks table: notable (10+) scoring runs."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from app.models.fields import Player


class Break(SQLModel, table=True):  # type: ignore[call-arg]
    """A single 10+ break.

    Only ``points`` is editable after creation; player, match and frame are
    fixed.
    """

    __tablename__ = "breaks"
    __table_args__ = (CheckConstraint("points >= 10", name="ck_breaks_points_min"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    match_id: UUID = Field(foreign_key="matches.id", index=True)
    frame_id: Optional[UUID] = Field(default=None, foreign_key="frames.id", index=True)
    player: Player
    points: int
    season: int = Field(index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
