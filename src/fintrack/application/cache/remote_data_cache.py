"""Per-session cache of server-fetched resources.

The cache holds the most recently fetched value for each QueryKey and
coordinates fetches:

- only one fetch per key is in flight; concurrent readers await the
  same task, and a read after an invalidation cancels the superseded
  fetch and moves its waiters over to the new one,
- a reader that is cancelled (the view went away) does not cancel the
  shared fetch,
- every invalidation bumps the entry generation, and a response that
  arrives for an older generation is handed to its waiters but never
  stored, so a slow pre-invalidation response cannot overwrite newer
  state.

One instance is created per user session and cleared on logout.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from fintrack.application.cache.query_key import QueryKey, ResourceFamily

logger = logging.getLogger(__name__)

Fetcher = Callable[[QueryKey], Awaitable[Any]]


class CacheState(str, Enum):
    ABSENT = "absent"  # Never loaded (or last load failed)
    LOADING = "loading"  # A fetch is in flight
    PRESENT = "present"  # Fresh value available
    STALE = "stale"  # Value available but must be re-fetched before use


@dataclass
class _Entry:
    fetcher: Optional[Fetcher] = None
    value: Any = None
    has_value: bool = False
    stale: bool = False
    generation: int = 0
    fetched_at: Optional[float] = None
    task: Optional[asyncio.Task] = None
    task_generation: int = -1

    @property
    def in_flight(self) -> bool:
        return self.task is not None and not self.task.done()


class RemoteDataCache:
    """Key-addressed cache with in-flight deduplication and family invalidation."""

    def __init__(
        self,
        stale_after: Optional[Mapping[Union[ResourceFamily, str], float]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: dict[QueryKey, _Entry] = {}
        self._stale_after = {
            (k.value if isinstance(k, ResourceFamily) else k): v
            for k, v in (stale_after or {}).items()
        }
        self._clock = clock
        # Keep references to background refreshes so they are not garbage collected
        self._background_tasks: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def read(self, key: QueryKey, fetcher: Optional[Fetcher] = None) -> Any:
        """Return the cached value for ``key``, fetching it when needed.

        The fetcher is remembered per key so later background refreshes
        can reuse it. Fetch errors propagate to every waiter and leave the
        entry without a new value. Waiters on a fetch that is superseded by
        a newer one move over to the newer fetch.
        """
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        if fetcher is not None:
            entry.fetcher = fetcher

        if entry.has_value and not self._is_stale(key, entry):
            return entry.value

        if not entry.in_flight or entry.task_generation != entry.generation:
            if entry.in_flight:
                logger.debug("Cancelling superseded fetch for %s", key)
                entry.task.cancel()
            entry.task = self._start_fetch(key, entry)
            entry.task_generation = entry.generation

        task = entry.task
        while True:
            try:
                # A cancelled reader must not cancel the fetch other readers share
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled() or entry.task is task:
                    raise
                # Superseded by a newer fetch for the same key
                task = entry.task

    def peek(self, key: QueryKey) -> Any:
        """Return the last stored value (fresh or stale) without fetching."""
        entry = self._entries.get(key)
        if entry is None or not entry.has_value:
            return None
        return entry.value

    def state(self, key: QueryKey) -> CacheState:
        entry = self._entries.get(key)
        if entry is None:
            return CacheState.ABSENT
        if entry.in_flight:
            return CacheState.LOADING
        if not entry.has_value:
            return CacheState.ABSENT
        if self._is_stale(key, entry):
            return CacheState.STALE
        return CacheState.PRESENT

    def keys(self, family: Optional[Union[ResourceFamily, str]] = None) -> list[QueryKey]:
        name = _family_name(family) if family is not None else None
        return [k for k in self._entries if name is None or k.family == name]

    # -------------------------------------------------------------------------
    # Invalidation
    # -------------------------------------------------------------------------

    def invalidate(self, key: QueryKey) -> None:
        """Mark ``key`` stale; the next read re-fetches. Never blocks."""
        entry = self._entries.get(key)
        if entry is None:
            return
        entry.stale = True
        entry.generation += 1

    def invalidate_family(
        self,
        family: Union[ResourceFamily, str],
        refetch: bool = False,
    ) -> list[QueryKey]:
        """Mark every variant of ``family`` stale.

        With ``refetch=True`` the variants that were loaded before are
        re-fetched in the background; the call itself returns immediately.
        Returns the invalidated keys.
        """
        keys = self.keys(family)
        for key in keys:
            self.invalidate(key)
            entry = self._entries[key]
            if refetch and entry.has_value and entry.fetcher is not None:
                self._schedule_refetch(key)
        return keys

    def invalidate_all(self) -> None:
        for key in list(self._entries):
            self.invalidate(key)

    def clear(self) -> None:
        """Drop every entry and cancel background refreshes (session teardown).

        Fetches already in flight still settle for the readers awaiting
        them, but their results are no longer stored.
        """
        for task in self._background_tasks:
            task.cancel()
        self._entries.clear()
        self._background_tasks.clear()
        logger.debug("Cache cleared")

    async def drain(self) -> None:
        """Wait until every scheduled background refresh has settled."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _is_stale(self, key: QueryKey, entry: _Entry) -> bool:
        if entry.stale:
            return True
        ttl = self._stale_after.get(key.family)
        if ttl is None or entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at >= ttl

    def _start_fetch(self, key: QueryKey, entry: _Entry) -> asyncio.Task:
        if entry.fetcher is None:
            msg = f"No fetcher known for cache key '{key}'"
            raise LookupError(msg)

        fetcher = entry.fetcher
        generation = entry.generation

        async def _fetch() -> Any:
            logger.debug("Fetching %s", key)
            value = await fetcher(key)
            if self._entries.get(key) is entry and entry.generation == generation:
                entry.value = value
                entry.has_value = True
                entry.stale = False
                entry.fetched_at = self._clock()
            else:
                logger.debug("Discarding outdated response for %s", key)
            return value

        return asyncio.create_task(_fetch(), name=f"fetch:{key}")

    def _schedule_refetch(self, key: QueryKey) -> None:
        async def _refetch() -> None:
            try:
                await self.read(key)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning("Background refresh of %s failed: %s", key, e)

        task = asyncio.create_task(_refetch(), name=f"refetch:{key}")
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)


def _family_name(family: Union[ResourceFamily, str]) -> str:
    return family.value if isinstance(family, ResourceFamily) else family
