from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.cache import TTLCache
from core.errors import InvalidArgument

logger = logging.getLogger("mykliq-api")

DEFAULT_SWEEP_INTERVAL_SECONDS = 120.0


class CacheSweeper:
    """Handle for the periodic expiry sweep of one cache.

    ``start()`` schedules the loop on the running event loop and ``stop()``
    cancels it; both are idempotent. Errors raised by a tick are logged and the
    loop carries on with the next one.
    """

    def __init__(self, cache: TTLCache, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS):
        if interval_seconds <= 0:
            raise InvalidArgument(f"interval_seconds must be > 0, got {interval_seconds}")
        self._cache = cache
        self._interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> int:
        removed = self._cache.sweep_expired()
        stats = self._cache.stats()
        self.ticks += 1
        logger.info(
            "cache_sweep",
            extra={"removed": removed, "size": stats.size, "capacity": stats.capacity},
        )
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            try:
                self.run_once()
            except Exception:
                logger.error("cache_sweep_error", exc_info=True)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "CacheSweeper":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
