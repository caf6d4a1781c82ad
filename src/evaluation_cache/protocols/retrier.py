"""Retry capability protocol."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Retrier(Protocol):
    """Runs an async operation, retrying transient failures."""

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or attempts are exhausted."""
        ...
