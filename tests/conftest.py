"""
Shared fixtures and in-memory fakes for the evaluation cache tests.
"""

import json
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
from pydantic import TypeAdapter

from evaluation_cache.entities import (
    CacheEntryEntity,
    CollectionAggregate,
    CollectionMetadata,
    Comment,
    EngagementStats,
    Evaluation,
    VideoMetadata,
)
from evaluation_cache.exceptions import DuplicateKeyError, ItemNotFoundError, StoreUnavailableError
from evaluation_cache.services import (
    CredentialRotator,
    DurableCache,
    EphemeralCache,
    EvaluationService,
    ModelEvaluator,
    QualityScoringEngine,
    TieredCache,
)

FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryEvaluationStore:
    """EvaluationStore fake with the same usage-count semantics as Redis.

    ``simulate_race`` makes the next insert behave as if another writer
    won between our update and insert. Keys in ``orphaned`` behave like a
    record with no readable payload: reads and updates miss, inserts collide.
    """

    def __init__(self) -> None:
        self.entries: dict[str, CacheEntryEntity] = {}
        self.available = True
        self.simulate_race = False
        self.orphaned: set[str] = set()
        self.insert_calls = 0

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError("store is down")

    async def find(self, key: str) -> CacheEntryEntity | None:
        self._check()
        if key in self.orphaned:
            return None
        return self.entries.get(key)

    async def find_and_touch(self, key: str) -> CacheEntryEntity | None:
        self._check()
        if key in self.orphaned:
            return None
        entry = self.entries.get(key)
        if entry is None:
            return None
        touched = CacheEntryEntity(
            key=key,
            payload=entry.payload,
            usage_count=entry.usage_count + 1,
            created_at=entry.created_at,
            last_accessed_at=datetime.now(timezone.utc),
        )
        self.entries[key] = touched
        return touched

    async def update(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity | None:
        self._check()
        if key in self.orphaned:
            return None
        entry = self.entries.get(key)
        if entry is None:
            return None
        updated = CacheEntryEntity(
            key=key,
            payload=payload,
            usage_count=entry.usage_count,
            created_at=entry.created_at,
            last_accessed_at=datetime.now(timezone.utc),
        )
        self.entries[key] = updated
        return updated

    async def insert(self, key: str, payload: dict[str, Any]) -> CacheEntryEntity:
        self._check()
        self.insert_calls += 1
        if self.simulate_race:
            self.simulate_race = False
            self.entries[key] = CacheEntryEntity(
                key=key,
                payload={"winner": True},
                usage_count=1,
                created_at=FIXED_NOW,
                last_accessed_at=FIXED_NOW,
            )
        if key in self.entries or key in self.orphaned:
            raise DuplicateKeyError(key)
        now = datetime.now(timezone.utc)
        entry = CacheEntryEntity(key=key, payload=payload, usage_count=1, created_at=now, last_accessed_at=now)
        self.entries[key] = entry
        return entry

    async def count_all(self) -> int:
        self._check()
        return len(self.entries)

    async def health_check(self) -> bool:
        return self.available

    async def get_stats(self) -> dict:
        return {"total_entries": await self.count_all()}


class FakeMetadataProvider:
    """MetadataProvider fake backed by dictionaries."""

    def __init__(
        self,
        videos: dict[str, VideoMetadata] | None = None,
        comments: dict[str, list[Comment]] | None = None,
        collections: dict[str, CollectionMetadata] | None = None,
        members: dict[str, list[str]] | None = None,
    ) -> None:
        self.videos = videos or {}
        self.comments = comments or {}
        self.collections = collections or {}
        self.members = members or {}
        self.video_calls: list[str] = []

    async def fetch_video(self, item_id: str) -> VideoMetadata:
        self.video_calls.append(item_id)
        if item_id not in self.videos:
            raise ItemNotFoundError("video", item_id)
        return self.videos[item_id]

    async def fetch_comments(self, item_id: str, limit: int = 30) -> list[Comment]:
        return self.comments.get(item_id, [])[:limit]

    async def fetch_collection(self, collection_id: str) -> CollectionMetadata:
        if collection_id not in self.collections:
            raise ItemNotFoundError("playlist", collection_id)
        return self.collections[collection_id]

    async def fetch_collection_items(self, collection_id: str, limit: int = 15) -> list[str]:
        return self.members.get(collection_id, [])[:limit]


class FakeChatClient:
    """ChatClient fake that answers from a per-title verdict table.

    Titles not in ``verdicts`` get ``default``. Raise an exception instance
    by putting it in ``errors`` keyed by credential.
    """

    def __init__(self, verdicts: dict[str, dict] | None = None, default: dict | None = None) -> None:
        self.verdicts = verdicts or {}
        self.default = default if default is not None else good_verdict()
        self.errors: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.keys_used: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        api_key: str,
        temperature: float = 0.2,
        max_tokens: int = 1500,
        json_mode: bool = True,
    ) -> str:
        self.keys_used.append(api_key)
        if api_key in self.errors:
            raise self.errors[api_key]
        self.calls.append(user_prompt)
        for title, verdict in self.verdicts.items():
            if f"Title: {title}\n" in user_prompt:
                return json.dumps(verdict)
        return json.dumps(self.default)


class PassThroughRetrier:
    async def run(self, operation):
        return await operation()


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.example.test/chat/completions")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


def good_verdict(**overrides) -> dict:
    verdict = {
        "isProgrammingTutorial": True,
        "detectedCategory": "python",
        "contentQuality": 8,
        "teachingClarity": 8,
        "practicalValue": 7,
        "upToDateScore": 7,
        "commentSentiment": 8,
        "overallRecommendation": "recommend",
        "evaluationConfidence": "high",
        "strengths": ["Clear explanations", "Good pacing"],
        "weaknesses": ["No tests shown"],
        "redFlags": [],
        "recommendedFor": "Beginners",
        "notRecommendedFor": "Experts",
        "summary": "A solid introduction.",
    }
    verdict.update(overrides)
    return verdict


def off_topic_verdict(category: str = "music") -> dict:
    return {
        "isProgrammingTutorial": False,
        "detectedCategory": category,
        "contentQuality": 0,
        "teachingClarity": 0,
        "practicalValue": 0,
        "upToDateScore": 0,
        "commentSentiment": 0,
        "overallRecommendation": "not_applicable",
        "summary": "",
    }


def make_video(
    item_id: str = "abc123",
    title: str = "Python Basics",
    views: int = 200_000,
    likes: int = 8_000,
    comments: int = 400,
    duration_seconds: int = 1800,
    tags: tuple[str, ...] = (),
) -> VideoMetadata:
    return VideoMetadata(
        item_id=item_id,
        title=title,
        description="Learn Python from scratch",
        channel_title="Code Channel",
        duration="30:00",
        duration_seconds=duration_seconds,
        statistics=EngagementStats(view_count=views, like_count=likes, comment_count=comments),
        tags=tags,
    )


def make_collection(collection_id: str = "PL1", title: str = "Python Course", item_count: int = 12) -> CollectionMetadata:
    return CollectionMetadata(collection_id=collection_id, title=title, item_count=item_count)


def build_service(
    provider: FakeMetadataProvider,
    chat: FakeChatClient,
    store: InMemoryEvaluationStore,
    keys: tuple[str, ...] = ("key-1",),
    clock: FakeClock | None = None,
) -> EvaluationService:
    clock = clock or FakeClock()
    durable = DurableCache(store)
    rotator = CredentialRotator(keys)
    scoring = QualityScoringEngine(clock=lambda: FIXED_NOW)
    return EvaluationService(
        metadata_provider=provider,
        model_evaluator=ModelEvaluator(chat, rotator),
        scoring=scoring,
        evaluation_cache=TieredCache(
            durable=durable,
            ephemeral=EphemeralCache(ttl=3600, clock=clock),
            adapter=TypeAdapter(Evaluation),
            name="evaluations",
        ),
        aggregate_cache=TieredCache(
            durable=durable,
            ephemeral=EphemeralCache(ttl=86400, clock=clock),
            adapter=TypeAdapter(CollectionAggregate),
            name="aggregates",
        ),
        retrier=PassThroughRetrier(),
        rotator=rotator,
        sample_size=5,
        collection_fetch_limit=15,
        comment_fetch_limit=30,
    )


@pytest.fixture
def store():
    return InMemoryEvaluationStore()


@pytest.fixture
def clock():
    return FakeClock()
