"""Business logic services layer.

This layer contains the core business logic and orchestrates
repositories, the model provider and the scoring heuristics.

Services depend on protocols (interfaces), not concrete implementations,
which enables easy testing and swapping of backends.
"""

from .collection_aggregator import CollectionAggregator
from .comment_signals import CommentSignalExtractor
from .credential_rotator import CredentialRotator, is_rotatable_error
from .durable_cache import DurableCache
from .ephemeral_cache import EphemeralCache
from .evaluation_service import EvaluationService
from .model_evaluator import ModelEvaluator
from .model_response import ModelVerdict, parse_model_verdict
from .quality_scoring import QualityScoringEngine
from .retry import TenacityRetrier
from .tiered_cache import TieredCache

__all__ = [
    "CollectionAggregator",
    "CommentSignalExtractor",
    "CredentialRotator",
    "DurableCache",
    "EphemeralCache",
    "EvaluationService",
    "ModelEvaluator",
    "ModelVerdict",
    "QualityScoringEngine",
    "TenacityRetrier",
    "TieredCache",
    "is_rotatable_error",
    "parse_model_verdict",
]
