"""Composite quality scoring.

Blends the model's sub-scores, comment signals and raw engagement counts
into one 0-100 score, then derives a quality tier. Every constant comes
from ``heuristics.ScoringTable``.
"""

from collections.abc import Callable
from datetime import datetime, timezone

from evaluation_cache.entities import (
    CommentSignals,
    EngagementStats,
    Evaluation,
    Penalties,
    QualityTier,
    Recommendation,
    Sentiment,
    SubScores,
    VideoMetadata,
)
from evaluation_cache.heuristics import DEFAULT_SCORING, HEURISTICS_VERSION, ScoringTable

from .cataloging import extract_tags, map_to_category
from .model_response import ModelVerdict
from .scoring_math import clamp, round_half_up


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QualityScoringEngine:
    """Deterministic scoring of model verdicts.

    Apart from ``evaluated_at`` (taken from the injected clock), the same
    inputs always produce the same Evaluation.

    Example:
        ```python
        engine = QualityScoringEngine()
        evaluation = engine.score(verdict, video, signals)
        evaluation.composite_score  # e.g. 78
        evaluation.quality_tier     # QualityTier.GOOD
        ```
    """

    def __init__(
        self,
        table: ScoringTable = DEFAULT_SCORING,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._table = table
        self._clock = clock

    def engagement_score(self, stats: EngagementStats) -> float:
        """Engagement on 0-100 from like ratio, comment ratio and view count.

        Zero views yields 0.
        """
        views = stats.view_count
        if views <= 0:
            return 0.0

        table = self._table.engagement

        like_ratio = stats.like_count / views * 100
        like_score = like_ratio * table.like_ratio_slope
        for minimum, points in table.like_ratio_tiers:
            if like_ratio >= minimum:
                like_score = points
                break

        comment_ratio = stats.comment_count / views * 100
        comment_score = comment_ratio * table.comment_ratio_slope
        for minimum, points in table.comment_ratio_tiers:
            if comment_ratio >= minimum:
                comment_score = points
                break

        bonus = 0.0
        for threshold, points in table.view_bonus_tiers:
            if views > threshold:
                bonus = points
                break

        return min(100.0, like_score * table.like_weight + comment_score * table.comment_weight + bonus)

    def penalties(self, signals: CommentSignals) -> Penalties:
        """Outdated and confusion deductions from comment signals."""
        table = self._table.penalties

        outdated = 0.0
        for minimum, points in table.outdated_tiers:
            if signals.outdated_indicators >= minimum:
                outdated = points
                break

        confusion = 0.0
        ratio = signals.confusion_ratio
        for minimum, points in table.confusion_tiers:
            if ratio > minimum:
                confusion = points
                break

        return Penalties(outdated=outdated, confusion=confusion)

    def composite(
        self,
        sub_scores: SubScores,
        signals: CommentSignals,
        recommendation: Recommendation | str,
    ) -> int:
        """Weighted composite score.

        Business logic:
        1. Weighted sum of engagement and the five model sub-scores
        2. Subtract outdated and confusion penalties
        3. Multiply by the recommendation multiplier
        4. Clamp to [0, 100] and round half-up

        Args:
            sub_scores: Model sub-scores (0-10) and engagement (0-100)
            signals: Comment signals for penalties
            recommendation: Model recommendation (unknown values multiply by 1.0)

        Returns:
            Integer score in [0, 100]
        """
        weights = self._table.weights
        raw = (
            sub_scores.engagement * weights.engagement
            + sub_scores.content_quality * weights.content_quality
            + sub_scores.teaching_clarity * weights.teaching_clarity
            + sub_scores.practical_value * weights.practical_value
            + sub_scores.up_to_date_score * weights.up_to_date_score
            + sub_scores.comment_sentiment * weights.comment_sentiment
        )
        raw -= self.penalties(signals).total

        key = recommendation.value if isinstance(recommendation, Recommendation) else recommendation
        raw *= self._table.multiplier_for(key)

        return round_half_up(clamp(raw, 0.0, 100.0))

    def quality_tier_for(self, score: float) -> QualityTier:
        """Step-function tier: excellent, good, average, below_average, poor."""
        for minimum, tier in self._table.tier_thresholds:
            if score >= minimum:
                return QualityTier(tier)
        return QualityTier(self._table.lowest_tier)

    def recommendation_for_score(self, score: float) -> Recommendation:
        """Score-derived recommendation, used where no model verdict exists."""
        for minimum, recommendation in self._table.recommendation_thresholds:
            if score >= minimum:
                return Recommendation(recommendation)
        if score < self._table.avoid_below:
            return Recommendation.AVOID
        return Recommendation.NEUTRAL

    def score(
        self,
        verdict: ModelVerdict,
        video: VideoMetadata,
        signals: CommentSignals,
    ) -> Evaluation:
        """Turn a model verdict into a final Evaluation.

        Args:
            verdict: Parsed model verdict
            video: Video metadata (statistics feed the engagement score)
            signals: Comment signals

        Returns:
            Evaluation; irrelevant items get zero scores and not_applicable labels
        """
        if not verdict.is_relevant:
            return self._not_applicable(verdict, video)

        sub_scores = SubScores(
            content_quality=verdict.content_quality,
            teaching_clarity=verdict.teaching_clarity,
            practical_value=verdict.practical_value,
            up_to_date_score=verdict.up_to_date_score,
            comment_sentiment=verdict.comment_sentiment,
            engagement=self.engagement_score(video.statistics),
        )
        composite = self.composite(sub_scores, signals, verdict.recommendation)

        return Evaluation(
            item_id=video.item_id,
            title=video.title,
            is_relevant=True,
            detected_category=verdict.detected_category,
            sub_scores=sub_scores,
            penalties=self.penalties(signals),
            composite_score=composite,
            quality_tier=self.quality_tier_for(composite),
            recommendation=verdict.recommendation,
            evaluated_at=self._clock(),
            confidence=verdict.confidence,
            strengths=verdict.strengths,
            weaknesses=verdict.weaknesses,
            red_flags=verdict.red_flags,
            recommended_for=verdict.recommended_for,
            not_recommended_for=verdict.not_recommended_for,
            summary=verdict.summary,
            comment_sentiment=signals.overall_sentiment,
            top_concerns=signals.top_concerns,
            comments_analyzed=signals.total_analyzed,
            statistics=video.statistics,
            duration_seconds=video.duration_seconds,
            heuristics_version=HEURISTICS_VERSION,
            **self._catalog_labels(verdict, video),
        )

    @staticmethod
    def _catalog_labels(verdict: ModelVerdict, video: VideoMetadata) -> dict:
        return {
            "category": map_to_category(verdict.detected_category),
            "subcategory": verdict.detected_subcategory,
            "tags": extract_tags(verdict.detected_category, verdict.detected_technologies, video.tags),
        }

    def _not_applicable(self, verdict: ModelVerdict, video: VideoMetadata) -> Evaluation:
        category = verdict.detected_category
        summary = verdict.summary or (
            f"This video is not a programming tutorial. It appears to be about {category}. "
            "Only coding and tech education content is evaluated."
        )
        return Evaluation(
            item_id=video.item_id,
            title=video.title,
            is_relevant=False,
            detected_category=category,
            sub_scores=SubScores(),
            penalties=Penalties(),
            composite_score=0,
            quality_tier=QualityTier.NOT_APPLICABLE,
            recommendation=Recommendation.NOT_APPLICABLE,
            evaluated_at=self._clock(),
            confidence="high",
            red_flags=(f"This is not a programming tutorial. Detected category: {category}",),
            recommended_for="N/A - Not a programming tutorial",
            not_recommended_for="Anyone looking for coding tutorials",
            summary=summary,
            comment_sentiment=Sentiment.NOT_APPLICABLE,
            statistics=video.statistics,
            duration_seconds=video.duration_seconds,
            heuristics_version=HEURISTICS_VERSION,
            **self._catalog_labels(verdict, video),
        )
