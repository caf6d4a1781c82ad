"""Cache entry domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a durably cached evaluation payload.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        key: The normalized cache key
        payload: The cached result as a JSON-compatible dict
        usage_count: Number of durable reads plus the initial write (>= 1)
        created_at: When the entry was first written
        last_accessed_at: When the entry was last read or rewritten
    """

    key: str
    payload: dict[str, Any] = field(default_factory=dict)
    usage_count: int = 1
    created_at: datetime | None = None
    last_accessed_at: datetime | None = None
