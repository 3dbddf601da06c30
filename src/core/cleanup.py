"""
Periodic cache cleanup.

Background asyncio task that sweeps expired entries out of a TTLCache on a
fixed interval. Reads already ignore expired entries, so this only bounds
memory held by keys nobody asks for again.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.cache import TTLCache

logger = logging.getLogger(__name__)


class PeriodicCleanup:
    def __init__(self, cache: TTLCache, *, interval_seconds: float = 300.0) -> None:
        self._cache = cache
        self._interval = float(interval_seconds)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self, *, iterations: Optional[int] = None) -> int:
        # Sleep first, then sweep; iterations=None loops until cancelled.
        # Returns the total number of entries removed.
        removed = 0
        done = 0
        while iterations is None or done < iterations:
            await asyncio.sleep(self._interval)
            removed += self._cache.cleanup()
            done += 1
        return removed

    def start(self) -> None:
        if self._interval <= 0 or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())
        logger.info("Cache cleanup scheduled every %.0fs", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Cache cleanup stopped")
