"""Read-through helpers on top of ``TTLCache``.

``get_or_compute`` and ``get_or_compute_async`` do not de-duplicate concurrent
misses: two callers racing on the same missing key both run the supplier.
Wrap hot keys with ``SingleFlight`` when that matters.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

from core.cache import TTLCache

T = TypeVar("T")

_MISSING = object()


def get_or_compute(
    cache: TTLCache,
    key: str,
    supplier: Callable[[], T],
    ttl_seconds: Optional[float] = None,
) -> T:
    cached = cache.get(key, _MISSING)
    if cached is not _MISSING:
        return cached

    # a raising supplier leaves the cache untouched
    value = supplier()
    cache.set(key, value, ttl_seconds)
    return value


async def get_or_compute_async(
    cache: TTLCache,
    key: str,
    supplier: Callable[[], Awaitable[T]],
    ttl_seconds: Optional[float] = None,
) -> T:
    cached = cache.get(key, _MISSING)
    if cached is not _MISSING:
        return cached

    value = await supplier()
    cache.set(key, value, ttl_seconds)
    return value


class SingleFlight:
    """Shares one in-flight supplier call per key between concurrent callers.

    The supplier runs in its own task, so cancelling any caller (the first
    one included) only stops that caller from waiting; the others still get
    the value. A failed computation is raised to every waiter and nothing is
    cached; the next call starts over. Bound to the event loop it is first
    used on.
    """

    def __init__(self, cache: TTLCache):
        self._cache = cache
        self._pending: dict[str, asyncio.Task] = {}

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    async def get_or_compute(
        self,
        key: str,
        supplier: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        task = self._pending.get(key)
        if task is None:
            task = asyncio.get_running_loop().create_task(
                self._compute(key, supplier, ttl_seconds)
            )
            self._pending[key] = task
            task.add_done_callback(lambda done: self._finish(key, done))

        return await asyncio.shield(task)

    async def _compute(
        self,
        key: str,
        supplier: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[float],
    ) -> Any:
        value = await supplier()
        self._cache.set(key, value, ttl_seconds)
        return value

    def _finish(self, key: str, task: asyncio.Task) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        if not task.cancelled():
            # mark retrieved so a failure nobody waits on does not warn
            task.exception()
