"""YouTube Data API v3 metadata provider.

Fetches video details, comment threads, playlist details and playlist
items. Requires an API key with the YouTube Data API enabled.

Endpoints used:
- ``videos`` (snippet, statistics, contentDetails)
- ``commentThreads`` (snippet, ordered by relevance)
- ``playlists`` (snippet, contentDetails)
- ``playlistItems`` (contentDetails)
"""

import logging
import re

import httpx

from evaluation_cache.config import settings
from evaluation_cache.entities import CollectionMetadata, Comment, EngagementStats, VideoMetadata
from evaluation_cache.exceptions import ConfigurationError, ItemNotFoundError

logger = logging.getLogger(__name__)

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)

# commentThreads page size cap imposed by the API
_MAX_PAGE_SIZE = 100


def parse_iso_duration(value: str | None) -> int:
    """Convert an ISO-8601 duration such as ``PT1H2M3S`` to seconds.

    Unparseable or missing values yield 0.
    """
    if not value:
        return 0
    match = _ISO_DURATION.match(value)
    if not match:
        return 0
    parts = {name: int(number or 0) for name, number in match.groupdict().items()}
    return parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]


def format_duration(seconds: int) -> str:
    """Format seconds as ``H:MM:SS`` or ``M:SS``."""
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class YouTubeMetadataProvider:
    """YouTube implementation of the MetadataProvider protocol.

    This class satisfies the MetadataProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = YouTubeMetadataProvider.create()
        video = await provider.fetch_video("rfscVS0vtbw")
        print(video.statistics.view_count)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the YouTube metadata provider.

        Args:
            api_key: YouTube Data API key. Defaults to settings.youtube_api_key.
            base_url: API base URL. Defaults to settings.youtube_base_url.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            http_client: Pre-built client (mainly for tests).
        """
        self._api_key = api_key or settings.youtube_api_key
        self._base_url = (base_url or settings.youtube_base_url).rstrip("/")
        self._timeout = timeout or settings.http_timeout
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @classmethod
    def create(cls, api_key: str | None = None) -> "YouTubeMetadataProvider":
        """Factory method to create YouTubeMetadataProvider with defaults."""
        return cls(api_key=api_key)

    async def _get(self, resource: str, params: dict) -> dict:
        if not self._api_key:
            raise ConfigurationError("YOUTUBE_API_KEY is not configured")

        response = await self.client.get(
            f"{self._base_url}/{resource}",
            params={**params, "key": self._api_key},
        )
        response.raise_for_status()
        return response.json()

    async def fetch_video(self, item_id: str) -> VideoMetadata:
        """Fetch video details and statistics.

        Raises:
            ItemNotFoundError: If the video does not exist or is private
        """
        data = await self._get(
            "videos",
            {"part": "snippet,statistics,contentDetails", "id": item_id},
        )
        items = data.get("items") or []
        if not items:
            raise ItemNotFoundError("video", item_id)

        item = items[0]
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        duration_seconds = parse_iso_duration(item.get("contentDetails", {}).get("duration"))

        return VideoMetadata(
            item_id=item.get("id", item_id),
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            channel_title=snippet.get("channelTitle", ""),
            channel_id=snippet.get("channelId", ""),
            published_at=snippet.get("publishedAt"),
            duration=format_duration(duration_seconds),
            duration_seconds=duration_seconds,
            tags=tuple(snippet.get("tags", [])),
            statistics=EngagementStats(
                view_count=int(stats.get("viewCount", 0)),
                like_count=int(stats.get("likeCount", 0)),
                comment_count=int(stats.get("commentCount", 0)),
            ),
        )

    async def fetch_comments(self, item_id: str, limit: int = 30) -> list[Comment]:
        """Fetch top-level comments ordered by relevance.

        Videos with comments disabled return an empty list.
        """
        try:
            data = await self._get(
                "commentThreads",
                {
                    "part": "snippet",
                    "videoId": item_id,
                    "maxResults": min(limit, _MAX_PAGE_SIZE),
                    "order": "relevance",
                    "textFormat": "plainText",
                },
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 403:
                logger.info(f"Comments unavailable for video {item_id}")
                return []
            raise

        comments = []
        for thread in data.get("items", [])[:limit]:
            snippet = thread.get("snippet", {}).get("topLevelComment", {}).get("snippet", {})
            text = snippet.get("textDisplay") or snippet.get("textOriginal") or ""
            if text:
                comments.append(Comment(text=text, like_count=int(snippet.get("likeCount", 0))))
        return comments

    async def fetch_collection(self, collection_id: str) -> CollectionMetadata:
        """Fetch playlist details.

        Raises:
            ItemNotFoundError: If the playlist does not exist or is private
        """
        data = await self._get(
            "playlists",
            {"part": "snippet,contentDetails", "id": collection_id},
        )
        items = data.get("items") or []
        if not items:
            raise ItemNotFoundError("playlist", collection_id)

        item = items[0]
        snippet = item.get("snippet", {})
        return CollectionMetadata(
            collection_id=item.get("id", collection_id),
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            channel_title=snippet.get("channelTitle", ""),
            item_count=int(item.get("contentDetails", {}).get("itemCount", 0)),
            published_at=snippet.get("publishedAt"),
        )

    async def fetch_collection_items(self, collection_id: str, limit: int = 15) -> list[str]:
        """Fetch member video ids in playlist order."""
        data = await self._get(
            "playlistItems",
            {
                "part": "contentDetails",
                "playlistId": collection_id,
                "maxResults": min(limit, _MAX_PAGE_SIZE),
            },
        )
        ids = [
            item.get("contentDetails", {}).get("videoId")
            for item in data.get("items", [])
        ]
        return [video_id for video_id in ids if video_id][:limit]

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
