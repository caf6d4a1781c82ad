"""Evaluation domain entities."""

from dataclasses import dataclass, field, fields
from datetime import datetime

from .enums import QualityTier, Recommendation, Sentiment
from .media import EngagementStats


@dataclass(frozen=True)
class SubScores:
    """Score breakdown of a single evaluation.

    The five model-derived fields are on a 0-10 scale. ``engagement`` is on
    0-100 and is computed from raw counts, never by the model.
    """

    content_quality: float = 0.0
    teaching_clarity: float = 0.0
    practical_value: float = 0.0
    up_to_date_score: float = 0.0
    comment_sentiment: float = 0.0
    engagement: float = 0.0

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of all score fields, in declaration order."""
        return tuple(f.name for f in fields(cls))

    def is_zero(self) -> bool:
        """Whether every field is zero."""
        return all(getattr(self, name) == 0 for name in self.field_names())


@dataclass(frozen=True)
class Penalties:
    """Named, non-negative deductions applied to a composite score."""

    outdated: float = 0.0
    confusion: float = 0.0

    @property
    def total(self) -> float:
        return self.outdated + self.confusion


@dataclass(frozen=True)
class Evaluation:
    """Final, immutable quality evaluation of one item.

    Invariant: when ``is_relevant`` is False, ``composite_score`` is 0 and
    every sub-score is 0.
    ``category``, ``subcategory`` and ``tags`` are catalog labels derived from
    the detected category, detected technologies and uploader tags.
    """

    item_id: str
    title: str
    is_relevant: bool
    detected_category: str
    sub_scores: SubScores
    penalties: Penalties
    composite_score: int
    quality_tier: QualityTier
    recommendation: Recommendation
    evaluated_at: datetime
    confidence: str = "medium"
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()
    recommended_for: str = ""
    not_recommended_for: str = ""
    summary: str = ""
    comment_sentiment: Sentiment = Sentiment.UNKNOWN
    top_concerns: tuple[str, ...] = ()
    comments_analyzed: int = 0
    statistics: EngagementStats = field(default_factory=EngagementStats)
    duration_seconds: int = 0
    heuristics_version: str = ""
    category: str = "other"
    subcategory: str = ""
    tags: tuple[str, ...] = ()
