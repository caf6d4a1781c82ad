"""Heuristic configuration tables for comment analysis and scoring.

Every number and keyword list that shapes a quality score lives here, so
a scoring change is a reviewable diff of this module rather than of the
algorithms that consume it. Bump ``HEURISTICS_VERSION`` whenever a table
changes; the version is recorded on every evaluation.

Tables are frozen dataclasses. Services receive them through their
constructors and default to the module-level instances below.
"""

from dataclasses import dataclass, field

HEURISTICS_VERSION = "2025.1"


@dataclass(frozen=True)
class KeywordTable:
    """Lower-case substrings used to classify community comments."""

    positive: tuple[str, ...] = (
        "great", "amazing", "best", "thank", "helpful", "excellent", "awesome",
        "perfect", "learned", "finally", "understand", "clear", "love",
        "fantastic", "wonderful",
    )
    negative: tuple[str, ...] = (
        "bad", "waste", "boring", "confusing", "outdated", "wrong", "incorrect",
        "useless", "terrible", "poor", "disappointed", "skip", "misleading", "error",
    )
    confusion: tuple[str, ...] = (
        "confused", "don't understand", "lost", "what?", "how?", "unclear",
        "makes no sense", "explain", "can't follow",
    )
    outdated: tuple[str, ...] = (
        "outdated", "old", "deprecated", "doesn't work anymore", "not working",
        "updated", "new version", "2024", "2023",
    )
    question: tuple[str, ...] = ("?", "how do", "what is", "can you", "please explain", "help")
    praise: tuple[str, ...] = (
        "best tutorial", "finally understand", "thank you so much", "saved my life",
        "exactly what i needed", "best ever",
    )
    complaint: tuple[str, ...] = (
        "waste of time", "too fast", "too slow", "doesn't explain", "skips over",
        "missing", "incomplete",
    )

    # Keyword subsets used to pick example comments for the model prompt
    prompt_positive: tuple[str, ...] = (
        "great", "helpful", "thanks", "amazing", "best", "learned", "understand",
    )
    prompt_negative: tuple[str, ...] = (
        "confus", "doesn't work", "outdated", "bad", "waste", "unclear", "wrong", "error",
    )


@dataclass(frozen=True)
class CommentThresholds:
    """Like-count thresholds for promoting a comment to an exemplar quote."""

    confusion_concern_likes: int = 5
    outdated_concern_likes: int = 3
    complaint_concern_likes: int = 5
    praise_likes: int = 10
    max_exemplars: int = 3
    concern_chars: int = 150
    outdated_concern_chars: int = 100

    # Sentiment buckets (ratios of the classified total)
    very_positive_ratio: float = 0.7
    positive_ratio: float = 0.5
    very_negative_ratio: float = 0.6
    negative_ratio: float = 0.4


@dataclass(frozen=True)
class EngagementTable:
    """Step tables for the engagement sub-score.

    Each tier is ``(minimum, points)``, checked from the top down.
    """

    like_ratio_tiers: tuple[tuple[float, float], ...] = (
        (5.0, 100.0), (4.0, 85.0), (3.0, 70.0), (2.0, 55.0), (1.0, 40.0),
    )
    like_ratio_slope: float = 40.0
    comment_ratio_tiers: tuple[tuple[float, float], ...] = (
        (0.5, 100.0), (0.3, 80.0), (0.1, 60.0),
    )
    comment_ratio_slope: float = 600.0
    # Strictly-greater view thresholds, diminishing returns
    view_bonus_tiers: tuple[tuple[int, float], ...] = (
        (1_000_000, 15.0), (500_000, 12.0), (100_000, 10.0), (50_000, 8.0),
        (10_000, 5.0), (1_000, 2.0),
    )
    like_weight: float = 0.5
    comment_weight: float = 0.35


@dataclass(frozen=True)
class ScoringWeights:
    """Linear blend weights; a perfect set of inputs sums to 100."""

    engagement: float = 0.10
    content_quality: float = 2.0
    teaching_clarity: float = 2.5
    practical_value: float = 2.0
    up_to_date_score: float = 1.5
    comment_sentiment: float = 1.0


@dataclass(frozen=True)
class PenaltyTable:
    """Deductions applied before the recommendation multiplier."""

    # (minimum outdated comments, penalty), checked from the top down
    outdated_tiers: tuple[tuple[int, float], ...] = ((5, 15.0), (3, 10.0), (1, 5.0))
    # (exclusive minimum confusion ratio, penalty)
    confusion_tiers: tuple[tuple[float, float], ...] = ((0.2, 10.0), (0.1, 5.0))


@dataclass(frozen=True)
class ScoringTable:
    """Everything the scoring engine needs besides its inputs."""

    weights: ScoringWeights = field(default_factory=ScoringWeights)
    penalties: PenaltyTable = field(default_factory=PenaltyTable)
    engagement: EngagementTable = field(default_factory=EngagementTable)
    recommendation_multipliers: tuple[tuple[str, float], ...] = (
        ("strongly_recommend", 1.05),
        ("recommend", 1.0),
        ("neutral", 0.95),
        ("caution", 0.85),
        ("avoid", 0.70),
    )
    # (minimum composite, tier), checked from the top down
    tier_thresholds: tuple[tuple[int, str], ...] = (
        (85, "excellent"), (70, "good"), (55, "average"), (40, "below_average"),
    )
    lowest_tier: str = "poor"
    # Score-derived recommendations for aggregates
    recommendation_thresholds: tuple[tuple[int, str], ...] = (
        (80, "strongly_recommend"), (70, "recommend"),
    )
    avoid_below: int = 40

    def multiplier_for(self, recommendation: str) -> float:
        """Return the multiplier for a recommendation, 1.0 when unknown."""
        return dict(self.recommendation_multipliers).get(recommendation, 1.0)


DEFAULT_KEYWORDS = KeywordTable()
DEFAULT_COMMENT_THRESHOLDS = CommentThresholds()
DEFAULT_SCORING = ScoringTable()
