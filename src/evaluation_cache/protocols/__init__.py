"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> document store, YouTube -> other platforms)
- Unit testing with in-memory fakes
- Composition instead of a shared service base class

Usage:
    ```python
    from evaluation_cache.protocols import EvaluationStore, MetadataProvider

    store: EvaluationStore = RedisEvaluationRepository.create()
    provider: MetadataProvider = YouTubeMetadataProvider.create()
    ```
"""

from .chat_client import ChatClient
from .evaluation_store import EvaluationStore
from .metadata_provider import MetadataProvider
from .retrier import Retrier

__all__ = [
    "ChatClient",
    "EvaluationStore",
    "MetadataProvider",
    "Retrier",
]
