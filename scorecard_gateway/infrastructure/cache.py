"""Time-bounded memoization of upstream queries"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from scorecard_gateway.infrastructure.observability.metrics import (
    cache_coalesced_counter,
    cache_hit_counter,
    cache_miss_counter,
)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """Stored payload and the clock reading when it was stored"""

    key: str
    timestamp: float
    payload: T


@dataclass
class _Flight:
    """A shared fetch and the number of callers still awaiting it"""

    task: asyncio.Task
    waiters: int = 0


class QueryCache:
    """
    In-memory TTL cache in front of the Scorecard client.

    - A read is a hit only while clock() - entry.timestamp < ttl_seconds
    - Stale entries are never evicted, only overwritten by the next miss on the same key
    - Last write wins; by default concurrent misses on one key each call fetch()
    - coalesce=True joins concurrent misses on a single in-flight fetch, which is
      cancelled only once every caller awaiting it has been cancelled
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        key_normalizer: Optional[Callable[[str], str]] = None,
        coalesce: bool = False,
    ):
        self.ttl_seconds = ttl_seconds
        self.coalesce = coalesce
        self._clock = clock
        self._normalize = key_normalizer or (lambda key: key)
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self._inflight: Dict[str, _Flight] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        """Fresh payload for key, or None"""
        entry = self._entries.get(self._normalize(key))
        if entry is not None and self._clock() - entry.timestamp < self.ttl_seconds:
            return entry.payload
        return None

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached payload for key, or await fetch() and store its result.

        Errors from fetch() propagate and nothing is stored.
        """
        key = self._normalize(key)
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.timestamp < self.ttl_seconds:
            cache_hit_counter.inc()
            return entry.payload

        if not self.coalesce:
            cache_miss_counter.inc()
            payload = await fetch()
            self._store(key, payload)
            return payload

        flight = self._inflight.get(key)
        if flight is None:
            cache_miss_counter.inc()
            flight = self._start_flight(key, fetch)
        else:
            cache_coalesced_counter.inc()
        return await self._await_flight(key, flight)

    def _start_flight(self, key: str, fetch: Callable[[], Awaitable[T]]) -> _Flight:
        async def run() -> T:
            payload = await fetch()
            self._store(key, payload)
            return payload

        flight = _Flight(task=asyncio.ensure_future(run()))
        self._inflight[key] = flight

        def finished(task: asyncio.Task) -> None:
            if self._inflight.get(key) is flight:
                del self._inflight[key]
            # Mark exceptions as retrieved even when every caller went away
            if not task.cancelled():
                task.exception()

        flight.task.add_done_callback(finished)
        return flight

    async def _await_flight(self, key: str, flight: _Flight) -> Any:
        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        finally:
            flight.waiters -= 1
            if flight.waiters == 0 and not flight.task.done():
                # Nobody is left to receive the result
                if self._inflight.get(key) is flight:
                    del self._inflight[key]
                flight.task.cancel()

    def _store(self, key: str, payload: Any) -> None:
        self._entries[key] = CacheEntry(key=key, timestamp=self._clock(), payload=payload)
