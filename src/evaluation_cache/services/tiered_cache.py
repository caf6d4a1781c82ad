"""Two-tier cache: durable store first, in-process TTL map second."""

import logging
from typing import Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from evaluation_cache.entities import CacheLookup, CacheTier
from evaluation_cache.exceptions import StoreUnavailableError

from .durable_cache import DurableCache
from .ephemeral_cache import EphemeralCache

T = TypeVar("T")


class TieredCache(Generic[T]):
    """Durable-then-ephemeral lookup and persistable-aware store.

    The cache is policy-free: the caller decides whether a value may be
    written durably. A durable store outage is logged and the cache keeps
    working from the ephemeral tier alone.

    Example:
        ```python
        cache = TieredCache(
            durable=DurableCache(store),
            ephemeral=EphemeralCache(ttl=3600),
            adapter=TypeAdapter(Evaluation),
            name="evaluations",
        )
        hit = await cache.lookup("video_abc")
        await cache.store("video_abc", evaluation, persistable=evaluation.is_relevant)
        ```
    """

    def __init__(
        self,
        durable: DurableCache,
        ephemeral: EphemeralCache[T],
        adapter: TypeAdapter[T],
        name: str = "cache",
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the tiered cache.

        Args:
            durable: Durable tier.
            ephemeral: Ephemeral tier (its TTL is this cache's TTL).
            adapter: Converts cached values to and from JSON-compatible dicts.
            name: Label used in log messages and stats.
            logger: Logger for hits, misses and degraded access.
        """
        self._durable = durable
        self._ephemeral = ephemeral
        self._adapter = adapter
        self._name = name
        self._logger = logger or logging.getLogger(__name__)
        self._stats = {"durable_hits": 0, "ephemeral_hits": 0, "misses": 0, "store_errors": 0}

    async def lookup(self, key: str) -> CacheLookup[T] | None:
        """Look a key up in the durable tier, then the ephemeral tier.

        Args:
            key: The normalized cache key

        Returns:
            CacheLookup describing the hit, or None on a miss
        """
        try:
            entry = await self._durable.find(key)
        except StoreUnavailableError as e:
            self._stats["store_errors"] += 1
            self._logger.warning(f"[{self._name}] durable lookup failed for {key}, using memory: {e}")
            entry = None

        if entry is not None:
            try:
                value = self._adapter.validate_python(entry.payload)
            except ValidationError as e:
                self._logger.warning(f"[{self._name}] discarding unreadable durable entry {key}: {e}")
            else:
                self._stats["durable_hits"] += 1
                self._logger.info(f"[{self._name}] durable hit {key} (used {entry.usage_count} times)")
                return CacheLookup(value=value, tier=CacheTier.DURABLE, usage_count=entry.usage_count)

        value = self._ephemeral.get(key)
        if value is not None:
            self._stats["ephemeral_hits"] += 1
            self._logger.info(f"[{self._name}] memory hit {key}")
            return CacheLookup(value=value, tier=CacheTier.EPHEMERAL)

        self._stats["misses"] += 1
        self._logger.info(f"[{self._name}] miss {key}")
        return None

    async def store(self, key: str, value: T, persistable: bool) -> None:
        """Store a value durably or only in memory.

        Args:
            key: The normalized cache key
            value: The value to cache
            persistable: Write to the durable tier when True, memory only otherwise
        """
        if not persistable:
            self._ephemeral.set(key, value)
            return

        payload = self._adapter.dump_python(value, mode="json")
        try:
            await self._durable.upsert(key, payload)
        except StoreUnavailableError as e:
            self._stats["store_errors"] += 1
            self._logger.warning(f"[{self._name}] durable store failed for {key}, keeping in memory: {e}")
            self._ephemeral.set(key, value)

    def get_stats(self) -> dict:
        return {
            "name": self._name,
            "ttl_seconds": self._ephemeral.ttl,
            "memory_entries": len(self._ephemeral),
            **self._stats,
        }

    async def durable_health_check(self) -> bool:
        """Whether the durable tier's store answers."""
        return await self._durable.store.health_check()

    async def durable_stats(self) -> dict:
        """Store-level statistics of the durable tier."""
        try:
            return {"available": True, **await self._durable.store.get_stats()}
        except StoreUnavailableError as e:
            self._logger.warning(f"[{self._name}] durable stats unavailable: {e}")
            return {"available": False}
