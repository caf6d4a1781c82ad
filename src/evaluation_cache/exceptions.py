"""Error taxonomy for the evaluation pipeline.

Fatal errors (configuration, exhausted credentials, terminal provider
failures) reach the caller. Cache races and store outages are recovered
inside the cache layer and never surface.
"""


class EvaluationCacheError(Exception):
    """Base class for all evaluation cache errors."""


class ConfigurationError(EvaluationCacheError):
    """Raised when required configuration is missing or invalid."""


class NoCredentialsConfiguredError(ConfigurationError):
    """Raised when no model provider credential is configured."""

    def __init__(self, message: str = "No model provider API key is configured") -> None:
        super().__init__(message)


class ExhaustedCredentialsError(EvaluationCacheError):
    """Raised when every credential failed with a rate-limit or auth error.

    Attributes:
        last_error: The upstream error returned for the last credential tried
        attempts: Number of credentials tried
    """

    def __init__(self, last_error: BaseException | None, attempts: int) -> None:
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(
            f"All {attempts} API key(s) exhausted (rate limited or unauthorized): {last_error}"
        )


class DuplicateKeyError(EvaluationCacheError):
    """Raised by a store when an insert collides with an existing key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cache key already exists: {key}")


class StoreUnavailableError(EvaluationCacheError):
    """Raised when the durable store cannot be reached."""


class ModelResponseError(EvaluationCacheError):
    """Raised when the model output is not a JSON object."""


class ItemNotFoundError(EvaluationCacheError):
    """Raised when the metadata provider has no item for an id."""

    def __init__(self, kind: str, item_id: str) -> None:
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind.capitalize()} not found: {item_id}")


class EmptyCollectionError(EvaluationCacheError):
    """Raised when a collection has no members to evaluate."""

    def __init__(self, collection_id: str) -> None:
        self.collection_id = collection_id
        super().__init__(f"Playlist is empty or private: {collection_id}")
