"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the model provider,
the metadata provider) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from evaluation_cache.protocols import ChatClient, EvaluationStore, MetadataProvider

from .groq_chat_client import GroqChatClient
from .redis_repository import RedisEvaluationRepository
from .youtube_metadata_provider import YouTubeMetadataProvider

__all__ = [
    "ChatClient",
    "EvaluationStore",
    "MetadataProvider",
    "GroqChatClient",
    "RedisEvaluationRepository",
    "YouTubeMetadataProvider",
]
