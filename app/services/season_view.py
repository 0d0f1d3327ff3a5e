"""Latest-request-wins loaders for derived views.

A view may start a new load before the previous one has finished (the user
switched season, or re-opened a match). Each load is tagged with a
generation; a result whose generation is no longer current is discarded, so a
slow, superseded request can never overwrite a newer one. The underlying
operation is not cancelled.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar
from uuid import UUID

from app.models.scoreboard import MatchDetail, SeasonOverview
from app.services.row_store import RowStore
from app.services.scoreboard_service import get_match_detail, get_season_overview

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestResult(Generic[T]):
    """Holds the result of the most recently started load."""

    def __init__(self) -> None:
        self._generation = 0
        self._closed = False
        self.value: Optional[T] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def run(self, loader: Callable[[], Awaitable[T]]) -> Optional[T]:
        """Run ``loader`` and keep its result only if no newer load started.

        Returns:
            The loaded value, or None when it was superseded or the view closed
        """
        self._generation += 1
        generation = self._generation
        result = await loader()
        if not self.is_current(generation):
            logger.debug(
                f"Discarding stale load (generation {generation}, current {self._generation})"
            )
            return None
        self.value = result
        return result

    def close(self) -> None:
        """Tear down: results of loads still in flight are dropped."""
        self._closed = True


class SeasonView:
    def __init__(self, store: RowStore) -> None:
        self._store = store
        self._latest: LatestResult[SeasonOverview] = LatestResult()

    @property
    def overview(self) -> Optional[SeasonOverview]:
        return self._latest.value

    async def load(self, season: int) -> Optional[SeasonOverview]:
        return await self._latest.run(lambda: get_season_overview(self._store, season))

    def close(self) -> None:
        self._latest.close()


class MatchView:
    def __init__(self, store: RowStore) -> None:
        self._store = store
        self._latest: LatestResult[MatchDetail] = LatestResult()

    @property
    def detail(self) -> Optional[MatchDetail]:
        return self._latest.value

    async def load(self, match_id: UUID) -> Optional[MatchDetail]:
        return await self._latest.run(lambda: get_match_detail(self._store, match_id))

    def close(self) -> None:
        self._latest.close()
