"""Durable cache tier backed by an EvaluationStore."""

import logging
from typing import Any

from evaluation_cache.entities import CacheEntryEntity
from evaluation_cache.exceptions import DuplicateKeyError
from evaluation_cache.protocols import EvaluationStore


class DurableCache:
    """Find-by-key and upsert-by-key over a persistent store.

    Every read increments the entry's usage count. Writes replace the
    payload of an existing entry without counting as a use, or insert a
    new entry with a usage count of 1.

    Example:
        ```python
        durable = DurableCache(RedisEvaluationRepository.create())
        entry = await durable.upsert("video_abc", {"composite_score": 72})
        ```
    """

    def __init__(self, store: EvaluationStore, logger: logging.Logger | None = None) -> None:
        """Initialize the durable cache.

        Args:
            store: Persistent backend (required).
            logger: Logger for race diagnostics.
        """
        self._store = store
        self._logger = logger or logging.getLogger(__name__)

    @property
    def store(self) -> EvaluationStore:
        return self._store

    async def find(self, key: str) -> CacheEntryEntity | None:
        """Find an entry, counting the read as a use.

        Args:
            key: The normalized cache key

        Returns:
            The entry with its updated usage metadata, or None
        """
        return await self._store.find_and_touch(key)

    async def upsert(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity:
        """Write a payload, updating in place or inserting.

        Business logic:
        1. Try to replace the payload of an existing entry
        2. Otherwise insert a fresh entry with usage_count = 1
        3. If a concurrent writer inserted first, return its entry
        4. If the winner's entry cannot be read back, overwrite it with ours

        A lost insert race is never raised to the caller.

        Args:
            key: The normalized cache key
            payload: JSON-compatible payload

        Returns:
            The stored (or winning) entry
        """
        updated = await self._store.update(key, payload)
        if updated is not None:
            return updated

        try:
            return await self._store.insert(key, payload)
        except DuplicateKeyError:
            self._logger.info(f"Concurrent insert detected for {key}, using existing entry")

        existing = await self._store.find(key)
        if existing is not None:
            return existing

        updated = await self._store.update(key, payload)
        if updated is not None:
            return updated

        self._logger.warning(f"Entry {key} unreadable after insert race, returning unsaved entry")
        return CacheEntryEntity(key=key, payload=payload)
