"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity
from .cache_lookup import CacheLookup, CacheTier
from .collection import CollectionAggregate, IrrelevantMember, MemberEvaluation
from .enums import QualityTier, Recommendation, Sentiment
from .evaluation import Evaluation, Penalties, SubScores
from .media import CollectionMetadata, Comment, EngagementStats, VideoMetadata
from .signals import CommentSignals

__all__ = [
    "CacheEntryEntity",
    "CacheLookup",
    "CacheTier",
    "CollectionAggregate",
    "CollectionMetadata",
    "Comment",
    "CommentSignals",
    "EngagementStats",
    "Evaluation",
    "IrrelevantMember",
    "MemberEvaluation",
    "Penalties",
    "QualityTier",
    "Recommendation",
    "Sentiment",
    "SubScores",
    "VideoMetadata",
]
