"""Ordinal and categorical value sets shared by evaluations and aggregates."""

from enum import Enum


class QualityTier(str, Enum):
    """Step-function bucket of a composite score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    BELOW_AVERAGE = "below_average"
    POOR = "poor"
    NOT_APPLICABLE = "not_applicable"


class Recommendation(str, Enum):
    """Recommendation category, from the model or derived from a score."""

    STRONGLY_RECOMMEND = "strongly_recommend"
    RECOMMEND = "recommend"
    NEUTRAL = "neutral"
    CAUTION = "caution"
    AVOID = "avoid"
    NOT_APPLICABLE = "not_applicable"


class Sentiment(str, Enum):
    """Overall sentiment bucket of a comment set."""

    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    MIXED = "mixed"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"
    UNKNOWN = "unknown"
    NOT_APPLICABLE = "not_applicable"
