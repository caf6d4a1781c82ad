"""Redis implementation of EvaluationStore.

Each entry is a Redis hash under ``<prefix>:<key>`` holding the JSON
payload, a usage counter and two epoch timestamps. It satisfies the
EvaluationStore protocol.
"""

import json
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError, WatchError

from evaluation_cache.config import get_redis_client, settings
from evaluation_cache.entities import CacheEntryEntity
from evaluation_cache.exceptions import DuplicateKeyError, StoreUnavailableError


class RedisEvaluationRepository:
    """Redis hash-per-entry durable store.

    This class satisfies the EvaluationStore protocol through structural
    typing - no explicit inheritance needed.

    Inserts write every field in one WATCH/MULTI transaction, so exactly one
    of two concurrent writers wins; the loser gets ``DuplicateKeyError``.
    Entries never expire here; retention is managed outside the service.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis evaluation repository.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            key_prefix: Namespace prefix for all keys.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> "RedisEvaluationRepository":
        """Factory method to create RedisEvaluationRepository with defaults.

        Args:
            redis_client: Redis client. If None, built from settings.
            key_prefix: Key prefix. If None, uses settings.

        Returns:
            Configured RedisEvaluationRepository
        """
        return cls(redis_client=redis_client, key_prefix=key_prefix)

    def _redis_key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except RedisError as e:
            raise StoreUnavailableError(f"Redis {operation} failed: {e}") from e

    async def find(self, key: str) -> CacheEntryEntity | None:
        """Find an entry without touching its usage metadata."""
        with self._translate_errors("find"):
            data = await self._client.hgetall(self._redis_key(key))
        return self._to_entity(key, data)

    async def find_and_touch(self, key: str) -> CacheEntryEntity | None:
        """Find an entry, incrementing usage_count and refreshing last_accessed_at."""
        redis_key = self._redis_key(key)
        with self._translate_errors("find_and_touch"):
            if not await self._client.hexists(redis_key, "payload"):
                return None

            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hincrby(redis_key, "usage_count", 1)
                pipe.hset(redis_key, "last_accessed_at", str(time.time()))
                pipe.hgetall(redis_key)
                _, _, data = await pipe.execute()

        return self._to_entity(key, data)

    async def update(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity | None:
        """Replace the payload of an existing entry, keeping its usage count."""
        redis_key = self._redis_key(key)
        with self._translate_errors("update"):
            if not await self._client.hexists(redis_key, "payload"):
                return None

            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hset(
                    redis_key,
                    mapping={
                        "payload": json.dumps(payload),
                        "last_accessed_at": str(time.time()),
                    },
                )
                pipe.hgetall(redis_key)
                _, data = await pipe.execute()

        return self._to_entity(key, data)

    async def insert(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity:
        """Insert a new entry with usage_count = 1.

        Raises:
            DuplicateKeyError: If another writer already holds the key
        """
        redis_key = self._redis_key(key)
        now = time.time()

        with self._translate_errors("insert"):
            try:
                async with self._client.pipeline(transaction=True) as pipe:
                    await pipe.watch(redis_key)
                    # A hash without a payload is a leftover, not an entry
                    if await pipe.hexists(redis_key, "payload"):
                        raise DuplicateKeyError(key)

                    pipe.multi()
                    pipe.hset(
                        redis_key,
                        mapping={
                            "payload": json.dumps(payload),
                            "usage_count": "1",
                            "created_at": str(now),
                            "last_accessed_at": str(now),
                        },
                    )
                    await pipe.execute()
            except WatchError as e:
                raise DuplicateKeyError(key) from e

        return CacheEntryEntity(
            key=key,
            payload=payload,
            usage_count=1,
            created_at=_to_datetime(now),
            last_accessed_at=_to_datetime(now),
        )

    async def count_all(self) -> int:
        """Count total entries in the store."""
        count = 0
        with self._translate_errors("count"):
            async for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
                count += 1
        return count

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def get_stats(self) -> dict:
        """Get repository statistics."""
        return {
            "key_prefix": self._prefix,
            "total_entries": await self.count_all(),
        }

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client

    @staticmethod
    def _to_entity(key: str, data: dict[str, str] | None) -> CacheEntryEntity | None:
        # A hash without a payload holds no entry
        if not data or "payload" not in data:
            return None

        try:
            payload = json.loads(data["payload"])
        except json.JSONDecodeError:
            return None

        return CacheEntryEntity(
            key=key,
            payload=payload,
            usage_count=int(data.get("usage_count", 1)),
            created_at=_to_datetime(data.get("created_at")),
            last_accessed_at=_to_datetime(data.get("last_accessed_at")),
        )


def _to_datetime(value: str | float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(float(value), tz=timezone.utc)
