"""Periodic snapshot refresh."""

import asyncio
import logging
from typing import Optional

from .cache import SnapshotCache

logger = logging.getLogger(__name__)


class SnapshotScheduler:
    """Refresh once at start, then every `interval_minutes`."""

    def __init__(self, cache: SnapshotCache, interval_minutes: float = 30) -> None:
        self.cache = cache
        self.interval = interval_minutes * 60
        self.runs = 0
        self.failures = 0

    async def tick(self) -> bool:
        self.runs += 1
        snapshot = await self.cache.safe_refresh()
        if snapshot is None:
            self.failures += 1
            return False
        return True

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        """Loop until `stop` is set. Refresh errors never end the loop."""
        stop = stop or asyncio.Event()
        logger.info("Snapshot refresh every %.0f seconds", self.interval)
        while not stop.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
