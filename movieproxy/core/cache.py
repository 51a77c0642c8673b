import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from cachetools import TLRUCache
from loguru import logger

from movieproxy.core.constants import CACHE_TTL_SECONDS

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    expires_at: float


@dataclass
class _Flight:
    task: asyncio.Task
    waiters: int = 0


def _time_to_use(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at


class ReadThroughCache:
    """
    In-process read-through cache with a per-entry time-to-live.

    Entries are replaced whole and expire lazily on read. Concurrent misses on
    the same key share a single in-flight computation; a failed computation is
    never stored and its exception is raised to every waiter.
    """

    def __init__(
        self,
        maxsize: int = 1024,
        default_ttl: float = CACHE_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._timer = timer
        self._store: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)
        self._in_flight: dict[str, _Flight] = {}

    def __len__(self) -> int:
        self._store.expire()
        return len(self._store)

    def get(self, key: str) -> CacheEntry | None:
        return self._store.get(key)

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._store[key] = CacheEntry(key=key, value=value, expires_at=self._timer() + ttl)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()
        logger.info("Read-through cache cleared")

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[T]], ttl: float | None = None) -> T:
        """Return the cached value for key, computing and storing it on a miss."""
        entry = self._store.get(key)
        if entry is not None:
            logger.debug(f"Cache hit for {key}")
            return entry.value

        flight = self._in_flight.get(key)
        if flight is None:
            logger.debug(f"Cache miss for {key}")
            flight = _Flight(task=asyncio.ensure_future(self._compute_and_store(key, compute, ttl)))
            self._in_flight[key] = flight
            flight.task.add_done_callback(lambda _task, k=key, f=flight: self._release(k, f))
        else:
            logger.debug(f"Joining in-flight computation for {key}")

        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        except asyncio.CancelledError:
            # Last waiter gone: stop the shared computation too
            if flight.waiters == 1 and not flight.task.done():
                flight.task.cancel()
                # Later callers start a fresh flight instead of joining the dying one
                self._release(key, flight)
            raise
        finally:
            flight.waiters -= 1

    async def _compute_and_store(self, key: str, compute: Callable[[], Awaitable[T]], ttl: float | None) -> T:
        value = await compute()
        self.set(key, value, ttl)
        return value

    def _release(self, key: str, flight: _Flight) -> None:
        if self._in_flight.get(key) is flight:
            del self._in_flight[key]
