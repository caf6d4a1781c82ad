"""Metadata entities returned by the metadata provider."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Comment:
    """A single piece of community feedback."""

    text: str
    like_count: int = 0


@dataclass(frozen=True)
class EngagementStats:
    """Raw engagement counters for an item."""

    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0


@dataclass(frozen=True)
class VideoMetadata:
    """Metadata for a single evaluable item (a video).

    Attributes:
        item_id: Provider identifier of the video
        title: Video title
        description: Video description
        channel_title: Name of the publishing channel
        channel_id: Provider identifier of the channel
        published_at: Publication timestamp as reported by the provider
        duration: Display duration ("1:02:03" or "12:34")
        duration_seconds: Duration in seconds
        tags: Provider tags
        statistics: Engagement counters
    """

    item_id: str
    title: str
    description: str = ""
    channel_title: str = ""
    channel_id: str = ""
    published_at: str | None = None
    duration: str = ""
    duration_seconds: int = 0
    tags: tuple[str, ...] = ()
    statistics: EngagementStats = field(default_factory=EngagementStats)


@dataclass(frozen=True)
class CollectionMetadata:
    """Metadata for a collection of items (a playlist)."""

    collection_id: str
    title: str
    description: str = ""
    channel_title: str = ""
    item_count: int = 0
    published_at: str | None = None
