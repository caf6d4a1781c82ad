"""HTTP handlers for evaluation operations.

Handlers convert between entities and DTOs (API contracts) and map
pipeline errors to HTTP status codes.
"""

import logging

from fastapi import HTTPException, status

from evaluation_cache.dto import (
    CollectionAggregateResponse,
    EvaluationResponse,
    HealthCheckResponse,
)
from evaluation_cache.exceptions import (
    ConfigurationError,
    EmptyCollectionError,
    ExhaustedCredentialsError,
    ItemNotFoundError,
)
from evaluation_cache.services import CredentialRotator, EvaluationService

logger = logging.getLogger(__name__)


class EvaluationHandler:
    """HTTP handlers for evaluation operations.

    This handler delegates business logic to EvaluationService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Hiding internal error details from clients

    Example:
        ```python
        handler = EvaluationHandler(evaluation_service=container.evaluation_service)

        @app.get("/evaluations/videos/{video_id}", response_model=EvaluationResponse)
        async def evaluate_video(video_id: str, handler: HandlerDep):
            return await handler.evaluate_video(video_id)
        ```
    """

    def __init__(
        self,
        evaluation_service: EvaluationService,
        rotator: CredentialRotator | None = None,
    ) -> None:
        """Initialize the evaluation handler.

        Args:
            evaluation_service: The evaluation service for business logic (required).
            rotator: Credential rotator, for reporting configured keys.
        """
        self._service = evaluation_service
        self._rotator = rotator

    async def evaluate_video(self, video_id: str) -> EvaluationResponse:
        """Handle GET /evaluations/videos/{video_id} requests.

        Raises:
            HTTPException: 404 if the video does not exist, 503 if the model
                provider is not usable, 500 for anything else
        """
        try:
            evaluation = await self._service.evaluate(video_id)
        except Exception as e:
            raise self._to_http_error(e, f"evaluate video {video_id}") from e
        return EvaluationResponse.model_validate(evaluation)

    async def evaluate_playlist(self, playlist_id: str) -> CollectionAggregateResponse:
        """Handle GET /evaluations/playlists/{playlist_id} requests.

        Raises:
            HTTPException: 404 if the playlist does not exist or is empty,
                503 if the model provider is not usable, 500 for anything else
        """
        try:
            aggregate = await self._service.evaluate_collection(playlist_id)
        except Exception as e:
            raise self._to_http_error(e, f"evaluate playlist {playlist_id}") from e
        return CollectionAggregateResponse.model_validate(aggregate)

    async def get_stats(self) -> dict:
        """Handle GET /stats requests."""
        return await self._service.get_stats()

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        store_healthy = await self._service.is_healthy()
        credentials = self._rotator.credential_count if self._rotator is not None else 0

        return HealthCheckResponse(
            status="healthy" if store_healthy and credentials > 0 else "degraded",
            store_healthy=store_healthy,
            credentials_configured=credentials,
        )

    @staticmethod
    def _to_http_error(error: Exception, action: str) -> HTTPException:
        if isinstance(error, (ItemNotFoundError, EmptyCollectionError)):
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

        if isinstance(error, (ConfigurationError, ExhaustedCredentialsError)):
            logger.error(f"Failed to {action}: {error}")
            return HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Evaluation service is temporarily unavailable",
            )

        logger.exception(f"Failed to {action}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Evaluation failed",
        )
