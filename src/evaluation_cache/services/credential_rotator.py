"""Round-robin credential rotation for the model provider.

Wraps every outbound model request. Rate-limit (429) and authorization
(401) failures move on to the next credential; anything else is returned
to the caller untouched.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import httpx

from evaluation_cache.exceptions import ExhaustedCredentialsError, NoCredentialsConfiguredError

T = TypeVar("T")

ROTATABLE_STATUS_CODES = frozenset({401, 429})


def is_rotatable_error(error: BaseException) -> bool:
    """Whether an error should move the rotator on to the next credential."""
    if not isinstance(error, httpx.HTTPStatusError):
        return False
    return error.response.status_code in ROTATABLE_STATUS_CODES


class CredentialRotator:
    """Selects a credential for each request and rotates on quota/auth errors.

    The cursor lives on the instance, so a process-wide rotator (built once
    by the service container) spreads load across keys between calls.

    Example:
        ```python
        rotator = CredentialRotator(settings.groq_api_keys)
        content = await rotator.call(
            lambda key: chat_client.complete(system, prompt, api_key=key)
        )
        ```
    """

    def __init__(
        self,
        credentials: Sequence[str],
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the rotator.

        Args:
            credentials: Ordered credentials; empty values are dropped.
            logger: Logger to report rotations on.
        """
        self._credentials = tuple(c for c in credentials if c)
        self._cursor = 0
        self._rotations = 0
        self._exhaustions = 0
        self._logger = logger or logging.getLogger(__name__)

    @property
    def cursor(self) -> int:
        """Index of the credential the next call starts with."""
        return self._cursor

    @property
    def credential_count(self) -> int:
        return len(self._credentials)

    def reset(self) -> None:
        """Move the cursor back to the first credential."""
        self._cursor = 0

    async def call(self, operation: Callable[[str], Awaitable[T]]) -> T:
        """Run ``operation`` with the current credential, rotating on 429/401.

        Each configured credential is tried at most once per call.

        Args:
            operation: Async callable receiving a credential

        Returns:
            Whatever ``operation`` returns

        Raises:
            NoCredentialsConfiguredError: If no credential is configured
            ExhaustedCredentialsError: If every credential was rate limited
                or rejected; the cursor is reset to the first credential
            Exception: Any non-rotatable error from ``operation``, unchanged
        """
        if not self._credentials:
            raise NoCredentialsConfiguredError()

        count = len(self._credentials)
        last_error: BaseException | None = None

        for _ in range(count):
            credential = self._credentials[self._cursor]
            try:
                return await operation(credential)
            except httpx.HTTPStatusError as e:
                if not is_rotatable_error(e):
                    raise
                last_error = e
                failed_position = self._cursor + 1
                self._cursor = (self._cursor + 1) % count
                self._rotations += 1
                self._logger.warning(
                    f"API key {failed_position}/{count} failed with "
                    f"{e.response.status_code}, rotating to key {self._cursor + 1}"
                )

        self._cursor = 0
        self._exhaustions += 1
        self._logger.error(f"All {count} API key(s) exhausted")
        raise ExhaustedCredentialsError(last_error, attempts=count)

    def get_stats(self) -> dict:
        """Get rotator statistics (never includes the credentials)."""
        return {
            "credential_count": len(self._credentials),
            "cursor": self._cursor,
            "rotations": self._rotations,
            "exhaustions": self._exhaustions,
        }
