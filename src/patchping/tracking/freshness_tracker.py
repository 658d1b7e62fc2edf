"""Freshness tracking for accepted news items.

The tracker owns the only piece of shared mutable state in the pipeline: the
timestamp and id of the most recently accepted item. All reads and writes go
through a single ``asyncio.Lock`` so acceptance decisions never interleave.

An item is new when its timestamp is at or after the last accepted one *and*
its id differs from the last accepted id. Steam timestamps have one-second
granularity, so the id breaks ties between items published in the same second
while still rejecting re-delivery of the latest item.
"""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Iterable

from patchping.datatypes.news_datatypes import FreshnessState, NewsItem
from patchping.util.logger import get_logger

logger = get_logger("freshness_tracker")


class FreshnessTracker:
    """Decides whether a parsed item has not been announced yet.

    State is in-memory only and starts at "now", so a restart never replays
    items published before the process came up.
    """

    def __init__(self, state: FreshnessState | None = None) -> None:
        self._state = state or FreshnessState.starting_now()
        self._lock = asyncio.Lock()
        logger.debug(
            "[TRACKER] Initialised at %s (last id=%r)",
            self._state.last_accepted_at.isoformat(),
            self._state.last_accepted_id,
        )

    @property
    def state(self) -> FreshnessState:
        """Return a snapshot copy of the current state."""
        return dataclasses.replace(self._state)

    async def consider_item(self, item: NewsItem) -> bool:
        """Accept ``item`` if it is new, updating the state before returning True."""
        async with self._lock:
            if item.published_at < self._state.last_accepted_at:
                return False
            if item.identifier == self._state.last_accepted_id:
                return False

            self._state.last_accepted_at = item.published_at
            self._state.last_accepted_id = item.identifier
            logger.info("[TRACKER] New update found: %s (id=%s)", item.title, item.identifier)
            return True

    async def select_newest(self, items: Iterable[NewsItem]) -> NewsItem | None:
        """Run a batch through :meth:`consider_item` and return the newest accepted item.

        Items are considered oldest first so that every new item advances the
        state and the item carried forward is the highest-timestamped one.
        Ties keep feed order.
        """
        newest: NewsItem | None = None
        for item in sorted(items, key=lambda it: it.published_at):
            if await self.consider_item(item):
                newest = item
        return newest
