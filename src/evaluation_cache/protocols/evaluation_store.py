"""Durable evaluation store protocol.

Defines the interface for any persistent key -> payload backend used as
the durable cache tier.

Implementations can include:
- Redis hashes (default)
- A document database collection with a unique index on the key
- A relational table with a primary key on the key
"""

from typing import Any, Protocol, runtime_checkable

from evaluation_cache.entities import CacheEntryEntity


@runtime_checkable
class EvaluationStore(Protocol):
    """Protocol for durable cache backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Backend failures must surface as ``StoreUnavailableError`` so the
    cache layer can degrade instead of failing an evaluation.

    Example:
        ```python
        from evaluation_cache.protocols import EvaluationStore

        store: EvaluationStore = RedisEvaluationRepository.create()
        ```
    """

    async def find(self, key: str) -> CacheEntryEntity | None:
        """Find an entry without touching its usage metadata.

        Args:
            key: The normalized cache key

        Returns:
            The entry, or None if absent
        """
        ...

    async def find_and_touch(self, key: str) -> CacheEntryEntity | None:
        """Find an entry, incrementing its usage count and access time.

        Args:
            key: The normalized cache key

        Returns:
            The updated entry, or None if absent
        """
        ...

    async def update(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity | None:
        """Replace the payload of an existing entry and refresh its access time.

        The usage count is left unchanged.

        Args:
            key: The normalized cache key
            payload: The new payload

        Returns:
            The updated entry, or None if no entry exists
        """
        ...

    async def insert(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity:
        """Insert a new entry with a usage count of 1.

        Args:
            key: The normalized cache key
            payload: The payload to store

        Returns:
            The stored entry

        Raises:
            DuplicateKeyError: If an entry with this key already exists
        """
        ...

    async def count_all(self) -> int:
        """Count total entries in the store."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is accessible."""
        ...

    async def get_stats(self) -> dict:
        """Get store statistics (implementation-specific)."""
        ...
