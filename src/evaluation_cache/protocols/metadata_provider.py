"""Metadata provider protocol.

Defines the interface for the external service that supplies item
metadata, engagement statistics and community comments.

Implementations can include:
- YouTube Data API v3 (default)
- Any video platform exposing per-item statistics and comments
"""

from typing import Protocol, runtime_checkable

from evaluation_cache.entities import CollectionMetadata, Comment, VideoMetadata


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for item and collection metadata sources.

    Example:
        ```python
        provider: MetadataProvider = YouTubeMetadataProvider.create()
        video = await provider.fetch_video("dQw4w9WgXcQ")
        ```
    """

    async def fetch_video(self, item_id: str) -> VideoMetadata:
        """Fetch metadata and statistics for one item.

        Raises:
            ItemNotFoundError: If the item does not exist
        """
        ...

    async def fetch_comments(self, item_id: str, limit: int = 30) -> list[Comment]:
        """Fetch up to ``limit`` comments for one item, most relevant first."""
        ...

    async def fetch_collection(self, collection_id: str) -> CollectionMetadata:
        """Fetch metadata for a collection.

        Raises:
            ItemNotFoundError: If the collection does not exist
        """
        ...

    async def fetch_collection_items(self, collection_id: str, limit: int = 15) -> list[str]:
        """Fetch up to ``limit`` member ids of a collection, in collection order."""
        ...
