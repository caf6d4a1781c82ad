"""In-process TTL cache.

Process-local and non-persistent, bounded by both its TTL and a maximum
entry count. Backed by ``cachetools.TTLCache``: expired entries are
dropped on every write, and the least recently used entry is evicted
when the cache is full.
"""

import time
from collections.abc import Callable
from typing import Generic, TypeVar

from cachetools import TTLCache

T = TypeVar("T")

DEFAULT_MAXSIZE = 10_000


class EphemeralCache(Generic[T]):
    """Key -> value map with a fixed time-to-live.

    Args:
        ttl: Seconds an entry stays valid
        maxsize: Maximum number of live entries
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl: float,
        maxsize: int = DEFAULT_MAXSIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self._ttl = ttl
        self._entries: TTLCache[str, T] = TTLCache(maxsize=maxsize, ttl=ttl, timer=clock)

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def maxsize(self) -> int:
        return int(self._entries.maxsize)

    def get(self, key: str) -> T | None:
        """Return the value for ``key`` unless missing or expired."""
        return self._entries.get(key)

    def set(self, key: str, value: T) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
