"""Evaluation Cache - cached AI quality scoring for programming tutorials.

This package provides a layered architecture for evaluating videos and
playlists with a language model while avoiding redundant model calls:

Layers:
    - protocols: Interface contracts (EvaluationStore, MetadataProvider, ChatClient, Retrier)
    - repositories: Data access implementations (Redis, YouTube, Groq)
    - services: Business logic (rotation, tiered cache, signals, scoring, aggregation)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from evaluation_cache import ServiceContainer

    container = ServiceContainer.create()
    evaluation = await container.evaluation_service.evaluate("rfscVS0vtbw")
    ```

For HTTP API:
    ```python
    from evaluation_cache.api.app import app
    ```
"""

from evaluation_cache.config import get_redis_client, settings
from evaluation_cache.container import ServiceContainer
from evaluation_cache.entities import CollectionAggregate, CommentSignals, Evaluation
from evaluation_cache.exceptions import (
    ConfigurationError,
    EvaluationCacheError,
    ExhaustedCredentialsError,
    NoCredentialsConfiguredError,
)
from evaluation_cache.handlers import EvaluationHandler
from evaluation_cache.protocols import ChatClient, EvaluationStore, MetadataProvider, Retrier
from evaluation_cache.repositories import (
    GroqChatClient,
    RedisEvaluationRepository,
    YouTubeMetadataProvider,
)
from evaluation_cache.services import (
    CollectionAggregator,
    CommentSignalExtractor,
    CredentialRotator,
    EvaluationService,
    QualityScoringEngine,
    TieredCache,
)

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "ServiceContainer",
    # Protocols (interfaces)
    "ChatClient",
    "EvaluationStore",
    "MetadataProvider",
    "Retrier",
    # Services (business logic)
    "CollectionAggregator",
    "CommentSignalExtractor",
    "CredentialRotator",
    "EvaluationService",
    "QualityScoringEngine",
    "TieredCache",
    # Handlers (HTTP)
    "EvaluationHandler",
    # Repositories (data access)
    "GroqChatClient",
    "RedisEvaluationRepository",
    "YouTubeMetadataProvider",
    # Entities (domain models)
    "CollectionAggregate",
    "CommentSignals",
    "Evaluation",
    # Errors
    "ConfigurationError",
    "EvaluationCacheError",
    "ExhaustedCredentialsError",
    "NoCredentialsConfiguredError",
]
