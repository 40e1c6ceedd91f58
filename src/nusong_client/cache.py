"""Local cache of server entities.

The cache is never written directly: a value only enters it as the result of
a load, and the only way to change it is to invalidate the key so the next
read refetches from the backend.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

QueryKey = tuple[str, ...]

MY_GENERATIONS: QueryKey = ("/api/my-generations",)
ALBUMS: QueryKey = ("/api/albums",)
PLAYLISTS: QueryKey = ("/api/playlists",)
BAND: QueryKey = ("/api/band",)
PLANS: QueryKey = ("/api/plans",)
COMMUNITY_TRACKS: QueryKey = ("/api/community/tracks",)
CURRENT_USER: QueryKey = ("/api/auth/user",)
GENERATION_QUOTA: QueryKey = ("/api/user/generation-status",)


class QueryCache:
    """Caches loader results by key and deduplicates concurrent loads."""

    def __init__(self) -> None:
        self._data: dict[QueryKey, Any] = {}
        self._inflight: dict[QueryKey, asyncio.Task[Any]] = {}
        self._generation: dict[QueryKey, int] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._data

    def peek(self, key: QueryKey) -> Any:
        """Return the cached value for key, or None."""
        return self._data.get(key)

    async def fetch(self, key: QueryKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for key, loading it if needed."""
        if key in self._data:
            return self._data[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader))
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def _load(self, key: QueryKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        generation = self._generation.get(key, 0)
        try:
            value = await loader()
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]

        # An invalidation while loading means this value may already be stale.
        if self._generation.get(key, 0) == generation:
            self._data[key] = value
        else:
            logger.debug("Discarding stale load for %s", key)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        """Drop every cached key that starts with prefix.

        Returns the number of entries dropped.
        """
        n = len(prefix)
        stale = [key for key in (*self._data, *self._inflight) if key[:n] == prefix]
        dropped = 0
        for key in set(stale):
            self._generation[key] = self._generation.get(key, 0) + 1
            if key in self._data:
                del self._data[key]
                dropped += 1
            # A future read should start a fresh load rather than join a stale one.
            self._inflight.pop(key, None)
        if dropped:
            logger.debug("Invalidated %d cache entries under %s", dropped, prefix)
        return dropped

    def clear(self) -> None:
        for key in list(self._data) + list(self._inflight):
            self._generation[key] = self._generation.get(key, 0) + 1
        self._data.clear()
        self._inflight.clear()
