"""Cache lookup domain entity."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class CacheTier(str, Enum):
    """Which cache tier served a lookup."""

    DURABLE = "durable"
    EPHEMERAL = "ephemeral"


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Result of a successful tiered cache lookup.

    Attributes:
        value: The cached value
        tier: The tier that served the hit
        usage_count: Durable usage count after this read (None for ephemeral hits)
    """

    value: T
    tier: CacheTier
    usage_count: int | None = None

    @property
    def is_durable(self) -> bool:
        """Whether the hit came from the durable store."""
        return self.tier is CacheTier.DURABLE
