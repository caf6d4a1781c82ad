"""Evaluation service for core business logic.

This service orchestrates the evaluation pipeline by coordinating the
tiered caches, the metadata provider, the comment extractor, the model
evaluator and the scoring engine.
"""

import logging

from evaluation_cache.config import settings
from evaluation_cache.entities import CollectionAggregate, Evaluation
from evaluation_cache.exceptions import EmptyCollectionError
from evaluation_cache.keys import make_item_key
from evaluation_cache.protocols import MetadataProvider, Retrier

from .collection_aggregator import CollectionAggregator
from .comment_signals import CommentSignalExtractor
from .credential_rotator import CredentialRotator
from .model_evaluator import ModelEvaluator
from .quality_scoring import QualityScoringEngine
from .tiered_cache import TieredCache


class EvaluationService:
    """Caller-facing evaluation API.

    This service depends on PROTOCOLS, not concrete implementations:
    - MetadataProvider: YouTube today, any platform with stats and comments
    - Retrier: wraps metadata calls with transient-failure retries

    Repeated calls within a cache lifetime return the cached result; a
    durable hit also increments the entry's usage count. Only relevant
    results are written durably.

    Example:
        ```python
        container = ServiceContainer.create()
        evaluation = await container.evaluation_service.evaluate("rfscVS0vtbw")
        aggregate = await container.evaluation_service.evaluate_collection("PL123")
        ```
    """

    def __init__(
        self,
        metadata_provider: MetadataProvider,
        model_evaluator: ModelEvaluator,
        scoring: QualityScoringEngine,
        evaluation_cache: TieredCache[Evaluation],
        aggregate_cache: TieredCache[CollectionAggregate],
        retrier: Retrier,
        extractor: CommentSignalExtractor | None = None,
        rotator: CredentialRotator | None = None,
        sample_size: int | None = None,
        collection_fetch_limit: int | None = None,
        comment_fetch_limit: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the evaluation service.

        Args:
            metadata_provider: Item metadata and comments source (required).
            model_evaluator: Model-backed verdict source (required).
            scoring: Composite scoring engine (required).
            evaluation_cache: Tiered cache for single-item evaluations (required).
            aggregate_cache: Tiered cache for collection aggregates (required).
            retrier: Retry policy for metadata calls (required).
            extractor: Comment signal extractor. Defaults to the standard tables.
            rotator: Credential rotator, reported in stats only.
            sample_size: Members evaluated per collection. Defaults to settings.
            collection_fetch_limit: Member ids fetched per collection. Defaults to settings.
            comment_fetch_limit: Comments fetched per item. Defaults to settings.
            logger: Service logger.
        """
        self._metadata = metadata_provider
        self._model = model_evaluator
        self._scoring = scoring
        self._evaluations = evaluation_cache
        self._aggregates = aggregate_cache
        self._retrier = retrier
        self._extractor = extractor or CommentSignalExtractor()
        self._rotator = rotator
        self._collection_fetch_limit = collection_fetch_limit or settings.collection_fetch_limit
        self._comment_fetch_limit = comment_fetch_limit or settings.comment_fetch_limit
        self._logger = logger or logging.getLogger(__name__)
        self._aggregator = CollectionAggregator(
            evaluate_member=self.evaluate,
            scoring=scoring,
            sample_size=sample_size or settings.collection_sample_size,
            logger=self._logger,
        )

    @staticmethod
    def evaluation_key(item_id: str) -> str:
        return make_item_key("video", item_id)

    @staticmethod
    def aggregate_key(collection_id: str) -> str:
        return make_item_key("playlist", collection_id)

    async def evaluate(self, item_id: str) -> Evaluation:
        """Evaluate a single video.

        Business logic:
        1. Look the video up in the tiered cache
        2. On a miss, fetch metadata and comments
        3. Extract comment signals and ask the model for a verdict
        4. Score the verdict
        5. Cache the result, durably only if the video is relevant

        Args:
            item_id: Video id

        Returns:
            The Evaluation (cached or fresh)

        Raises:
            ItemNotFoundError: If the video does not exist
            NoCredentialsConfiguredError: If no model key is configured
            ExhaustedCredentialsError: If every model key failed
        """
        key = self.evaluation_key(item_id)
        hit = await self._evaluations.lookup(key)
        if hit is not None:
            return hit.value

        video = await self._retrier.run(lambda: self._metadata.fetch_video(item_id))
        comments = await self._retrier.run(
            lambda: self._metadata.fetch_comments(item_id, limit=self._comment_fetch_limit)
        )

        signals = self._extractor.analyze(comments)
        verdict = await self._model.evaluate(video, comments, signals)
        evaluation = self._scoring.score(verdict, video, signals)

        await self._evaluations.store(key, evaluation, persistable=evaluation.is_relevant)
        self._logger.info(
            f"Evaluated video {item_id}: score={evaluation.composite_score} "
            f"tier={evaluation.quality_tier.value}"
        )
        return evaluation

    async def evaluate_collection(self, collection_id: str) -> CollectionAggregate:
        """Evaluate a playlist from a sample of its videos.

        Args:
            collection_id: Playlist id

        Returns:
            The CollectionAggregate (cached or fresh)

        Raises:
            ItemNotFoundError: If the playlist does not exist
            EmptyCollectionError: If the playlist has no members
        """
        key = self.aggregate_key(collection_id)
        hit = await self._aggregates.lookup(key)
        if hit is not None:
            return hit.value

        collection = await self._retrier.run(lambda: self._metadata.fetch_collection(collection_id))
        member_ids = await self._retrier.run(
            lambda: self._metadata.fetch_collection_items(
                collection_id, limit=self._collection_fetch_limit
            )
        )
        if not member_ids:
            raise EmptyCollectionError(collection_id)

        aggregate = await self._aggregator.aggregate(collection, member_ids)

        if not aggregate.is_relevant_collection:
            self._logger.info(f"Playlist {collection_id} is not a programming playlist, memory cache only")
        await self._aggregates.store(key, aggregate, persistable=aggregate.is_relevant_collection)
        return aggregate

    async def get_stats(self) -> dict:
        """Get cache and rotator statistics."""
        stats = {
            "evaluations": self._evaluations.get_stats(),
            "aggregates": self._aggregates.get_stats(),
        }
        if self._rotator is not None:
            stats["credentials"] = self._rotator.get_stats()
        stats["store"] = await self._evaluations.durable_stats()
        return stats

    async def is_healthy(self) -> bool:
        """Whether the durable store is reachable.

        The service keeps answering from memory when it is not, so this is
        reported rather than enforced.
        """
        return await self._evaluations.durable_health_check()
