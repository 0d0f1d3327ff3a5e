"""Matches table: one head-to-head match between the two fixed players."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from app.models.fields import Player


class Match(SQLModel, table=True):  # type: ignore[call-arg]
    """A best-of-N match.

    The winner column is an optional manual override; the displayed winner is
    normally derived from the match's frames.
    """

    __tablename__ = "matches"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    season: int = Field(index=True)
    played_on: date = Field(index=True)
    best_of: int = Field(default=3)
    first_breaker: Optional[Player] = Field(default=None)
    winner: Optional[Player] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
