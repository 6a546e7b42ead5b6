"""Snapshot cache: serve the latest matched stories, recompute on demand."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ..errors import SnapshotUnavailableError
from ..models import MatchResult, Snapshot
from .store import SnapshotStore

logger = logging.getLogger(__name__)

MAX_READ_LIMIT = 25

ComputeFn = Callable[[int], Awaitable[MatchResult]]


def empty_payload() -> Dict[str, Any]:
    return {"groups": []}


class SnapshotCache:
    """Latest-snapshot reads over an append-only store.

    `refresh()` is single-flight: callers arriving while a refresh is running
    await that same computation instead of starting another one.
    """

    def __init__(
        self,
        store: SnapshotStore,
        compute: ComputeFn,
        limit_groups: int = 15,
        read_limit: int = 15,
    ) -> None:
        self.store = store
        self.compute = compute
        self.limit_groups = limit_groups
        self.read_limit = read_limit
        self._inflight: Optional[asyncio.Future] = None
        self._last_good: Optional[Snapshot] = None

    async def refresh(self) -> Snapshot:
        """Recompute and append a snapshot. Raises if computing or storing fails."""
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            logger.debug("Refresh already in flight, joining it")
        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, future: asyncio.Future) -> None:
        if self._inflight is future:
            self._inflight = None

    async def _refresh(self) -> Snapshot:
        result = await self.compute(self.limit_groups)
        snapshot = await asyncio.to_thread(self.store.append, result.to_payload())
        self._last_good = snapshot
        logger.info("Snapshot %s stored with %d groups", snapshot.id, len(result.groups))
        return snapshot

    async def safe_refresh(self) -> Optional[Snapshot]:
        """Refresh, logging failures instead of raising. The previous snapshot stays current."""
        try:
            return await self.refresh()
        except Exception as e:
            logger.error("Snapshot refresh failed, keeping previous snapshot: %s", e)
            return None

    async def latest(self) -> Optional[Snapshot]:
        """Newest stored snapshot, or the last one this process wrote if the store is unreadable."""
        try:
            snapshot = await asyncio.to_thread(self.store.latest)
        except Exception as e:
            logger.warning("Snapshot store unreadable: %s", e)
            return self._last_good
        if snapshot is not None:
            self._last_good = snapshot
        return snapshot

    def clamp_limit(self, limit: Optional[int]) -> int:
        if not limit or limit < 1:
            limit = self.read_limit
        return min(limit, MAX_READ_LIMIT)

    async def read(self, limit: Optional[int] = None, strict: bool = False) -> Dict[str, Any]:
        """
        Payload of the latest snapshot, computing one on cold start.

        Args:
            limit: Groups to return (clamped to 1..25, defaults to config)
            strict: Raise SnapshotUnavailableError instead of returning
                an empty payload when a cold-start refresh fails

        Returns:
            `{"groups": [...]}`, truncated to `limit`
        """
        snapshot = await self.latest()
        if snapshot is None:
            try:
                snapshot = await self.refresh()
            except Exception as e:
                logger.error("No snapshot available and refresh failed: %s", e)
                if strict:
                    raise SnapshotUnavailableError("No snapshot available") from e
                return empty_payload()

        payload = dict(snapshot.payload or empty_payload())
        groups = payload.get("groups") or []
        payload["groups"] = list(groups[: self.clamp_limit(limit)])
        return payload
