"""Explicit wiring of the evaluation pipeline.

One container per process: the credential rotator cursor and the
in-memory cache tiers live on the instances built here and are shared
by every request that goes through the container.
"""

import logging
from dataclasses import dataclass

from pydantic import TypeAdapter

from evaluation_cache.config import Settings, get_redis_client, get_settings
from evaluation_cache.entities import CollectionAggregate, Evaluation
from evaluation_cache.repositories import (
    GroqChatClient,
    RedisEvaluationRepository,
    YouTubeMetadataProvider,
)
from evaluation_cache.services import (
    CredentialRotator,
    DurableCache,
    EphemeralCache,
    EvaluationService,
    ModelEvaluator,
    QualityScoringEngine,
    TenacityRetrier,
    TieredCache,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Holds the process-wide service instances and their closeable clients."""

    settings: Settings
    repository: RedisEvaluationRepository
    chat_client: GroqChatClient
    metadata_provider: YouTubeMetadataProvider
    rotator: CredentialRotator
    evaluation_service: EvaluationService

    @classmethod
    def create(cls, app_settings: Settings | None = None) -> "ServiceContainer":
        """Build every layer from settings.

        Args:
            app_settings: Settings to use. Defaults to the cached settings.

        Returns:
            A fully wired ServiceContainer
        """
        app_settings = app_settings or get_settings()

        repository = RedisEvaluationRepository.create(
            redis_client=get_redis_client(app_settings),
            key_prefix=app_settings.cache_key_prefix,
        )
        chat_client = GroqChatClient(
            model_name=app_settings.groq_model,
            base_url=app_settings.groq_base_url,
            timeout=app_settings.http_timeout,
        )
        metadata_provider = YouTubeMetadataProvider(
            api_key=app_settings.youtube_api_key,
            base_url=app_settings.youtube_base_url,
            timeout=app_settings.http_timeout,
        )

        rotator = CredentialRotator(app_settings.groq_api_keys)
        if rotator.credential_count == 0:
            logger.warning("No GROQ_API_KEY configured, evaluations will fail until one is set")

        durable = DurableCache(repository)
        scoring = QualityScoringEngine()

        evaluation_service = EvaluationService(
            metadata_provider=metadata_provider,
            model_evaluator=ModelEvaluator(chat_client, rotator),
            scoring=scoring,
            evaluation_cache=TieredCache(
                durable=durable,
                ephemeral=EphemeralCache(
                    ttl=app_settings.evaluation_cache_ttl,
                    maxsize=app_settings.memory_cache_maxsize,
                ),
                adapter=TypeAdapter(Evaluation),
                name="evaluations",
            ),
            aggregate_cache=TieredCache(
                durable=durable,
                ephemeral=EphemeralCache(
                    ttl=app_settings.aggregate_cache_ttl,
                    maxsize=app_settings.memory_cache_maxsize,
                ),
                adapter=TypeAdapter(CollectionAggregate),
                name="aggregates",
            ),
            retrier=TenacityRetrier(
                attempts=app_settings.retry_attempts,
                base_delay=app_settings.retry_base_delay,
                max_delay=app_settings.retry_max_delay,
            ),
            rotator=rotator,
            sample_size=app_settings.collection_sample_size,
            collection_fetch_limit=app_settings.collection_fetch_limit,
            comment_fetch_limit=app_settings.comment_fetch_limit,
        )

        logger.info(
            f"Evaluation service ready: model={app_settings.groq_model}, "
            f"keys={rotator.credential_count}, prefix={app_settings.cache_key_prefix}"
        )

        return cls(
            settings=app_settings,
            repository=repository,
            chat_client=chat_client,
            metadata_provider=metadata_provider,
            rotator=rotator,
            evaluation_service=evaluation_service,
        )

    async def aclose(self) -> None:
        """Close every outbound client."""
        await self.chat_client.close()
        await self.metadata_provider.close()
        await self.repository.close()
