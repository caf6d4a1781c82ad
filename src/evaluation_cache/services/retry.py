"""Transient-failure retries for metadata provider calls."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from evaluation_cache.config import settings

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TenacityRetrier:
    """Capped exponential backoff over network-level failures.

    Only ``httpx.TransportError`` (connection resets, timeouts) is retried.
    HTTP status errors are answers, not transient faults, and propagate
    on the first attempt.
    """

    def __init__(
        self,
        attempts: int | None = None,
        base_delay: float | None = None,
        max_delay: float | None = None,
    ) -> None:
        self._attempts = attempts or settings.retry_attempts
        self._base_delay = settings.retry_base_delay if base_delay is None else base_delay
        self._max_delay = settings.retry_max_delay if max_delay is None else max_delay

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation``, retrying transport errors.

        Raises:
            httpx.TransportError: The last error once attempts are exhausted
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._base_delay, max=self._max_delay),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await operation()
        raise AssertionError("unreachable")
