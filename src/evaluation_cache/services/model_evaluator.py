"""Model-backed tutorial evaluator."""

import logging
from collections.abc import Sequence

from evaluation_cache.entities import Comment, CommentSignals, VideoMetadata
from evaluation_cache.protocols import ChatClient

from .credential_rotator import CredentialRotator
from .model_response import ModelVerdict, parse_model_verdict
from .prompts import SYSTEM_PROMPT, build_user_prompt

EVALUATION_TEMPERATURE = 0.2
EVALUATION_MAX_TOKENS = 1500


class ModelEvaluator:
    """Asks the chat model for a verdict on one video.

    The chat client is always called through the rotator, so every
    request carries a rotatable credential.
    """

    def __init__(
        self,
        chat_client: ChatClient,
        rotator: CredentialRotator,
        temperature: float = EVALUATION_TEMPERATURE,
        max_tokens: int = EVALUATION_MAX_TOKENS,
        logger: logging.Logger | None = None,
    ) -> None:
        self._chat = chat_client
        self._rotator = rotator
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._logger = logger or logging.getLogger(__name__)

    async def evaluate(
        self,
        video: VideoMetadata,
        comments: Sequence[Comment],
        signals: CommentSignals,
    ) -> ModelVerdict:
        """Get the model's verdict for a video.

        Args:
            video: Video metadata and statistics
            comments: Raw comments (for exemplar quotes)
            signals: Pre-computed comment signals

        Returns:
            The parsed, defaulted verdict

        Raises:
            NoCredentialsConfiguredError: If no API key is configured
            ExhaustedCredentialsError: If every key was rate limited or rejected
            ModelResponseError: If the model did not return a JSON object
        """
        user_prompt = build_user_prompt(video, comments, signals)

        async def request(api_key: str) -> str:
            return await self._chat.complete(
                SYSTEM_PROMPT,
                user_prompt,
                api_key=api_key,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                json_mode=True,
            )

        self._logger.info(f"Requesting model evaluation for video {video.item_id} ({self._chat.model_name})")
        content = await self._rotator.call(request)
        return parse_model_verdict(content)
