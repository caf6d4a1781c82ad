"""Collection-level aggregation of member evaluations."""

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from datetime import datetime, timezone

from evaluation_cache.entities import (
    CollectionAggregate,
    CollectionMetadata,
    Evaluation,
    IrrelevantMember,
    MemberEvaluation,
    QualityTier,
    Recommendation,
    SubScores,
)
from evaluation_cache.exceptions import ConfigurationError

from .cataloging import collection_tags, majority_category
from .quality_scoring import QualityScoringEngine
from .scoring_math import round_half_up

MAX_STRENGTHS = 5
MAX_WEAKNESSES = 5
MAX_RED_FLAGS = 3
MAX_IRRELEVANT_MEMBERS = 3
MEMBER_HIGHLIGHTS = 2
MEMBER_SUMMARY_CHARS = 150

MemberEvaluator = Callable[[str], Awaitable[Evaluation]]


def _unique(items: Iterable[str], limit: int) -> tuple[str, ...]:
    """First-seen order, duplicates dropped, at most ``limit`` items."""
    return tuple(dict.fromkeys(items))[:limit]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_collection_summary(
    collection: CollectionMetadata,
    average_score: int,
    relevant_count: int,
    irrelevant_count: int,
    sampled_count: int,
) -> str:
    """Plain-language summary of a collection verdict."""
    summary = f'"{collection.title}" is a playlist with {collection.item_count} videos. '

    if irrelevant_count > relevant_count:
        summary += (
            f"Warning: Most analyzed videos ({irrelevant_count}/{sampled_count}) "
            "are not programming tutorials. "
        )
    elif irrelevant_count > 0:
        summary += (
            f"Note: {irrelevant_count} of {sampled_count} analyzed videos "
            "are not programming content. "
        )

    if average_score >= 70:
        summary += f"The programming tutorials have a good average quality score of {average_score}/100."
    elif average_score >= 50:
        summary += f"The programming tutorials have an average quality score of {average_score}/100."
    elif average_score > 0:
        summary += f"The programming tutorials have a below-average quality score of {average_score}/100."

    return summary.strip()


class CollectionAggregator:
    """Scores a bounded sample of a collection and folds the results.

    Members are evaluated one at a time through the single-item pipeline
    (``evaluate_member``), so cached members cost no model call. A member
    whose evaluation fails is logged and skipped; configuration errors
    abort the whole aggregate.

    Example:
        ```python
        aggregator = CollectionAggregator(service.evaluate, QualityScoringEngine())
        aggregate = await aggregator.aggregate(playlist, member_ids)
        ```
    """

    def __init__(
        self,
        evaluate_member: MemberEvaluator,
        scoring: QualityScoringEngine,
        sample_size: int = 5,
        clock: Callable[[], datetime] = _utcnow,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            evaluate_member: Async single-item evaluation (item id -> Evaluation).
            scoring: Engine supplying the tier and recommendation functions.
            sample_size: Maximum number of members to evaluate.
            clock: Time source for ``evaluated_at``.
            logger: Logger for skipped members.
        """
        if sample_size < 1:
            raise ValueError(f"sample_size must be at least 1, got {sample_size}")
        self._evaluate_member = evaluate_member
        self._scoring = scoring
        self._sample_size = sample_size
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

    @property
    def sample_size(self) -> int:
        return self._sample_size

    async def aggregate(
        self,
        collection: CollectionMetadata,
        member_ids: Sequence[str],
    ) -> CollectionAggregate:
        """Evaluate the first members of a collection and aggregate them.

        Business logic:
        1. Take the first ``min(sample_size, len(member_ids))`` ids in order
        2. Evaluate each; failures are logged and skipped
        3. Sum composite and sub-scores over relevant members only
        4. Average (0 when nothing is relevant), derive tier and recommendation
        5. Force ``caution`` when more than half the sample is off-topic
        6. File the collection under its members' most common category

        Args:
            collection: Collection metadata
            member_ids: Member ids in collection order

        Returns:
            CollectionAggregate

        Raises:
            ConfigurationError: If a member evaluation hits a configuration error
        """
        sample = list(member_ids[: self._sample_size])
        sampled_count = len(sample)

        members: list[MemberEvaluation] = []
        irrelevant: list[IrrelevantMember] = []
        relevant: list[Evaluation] = []
        scored: list[Evaluation] = []

        for item_id in sample:
            try:
                evaluation = await self._evaluate_member(item_id)
            except ConfigurationError:
                raise
            except Exception as e:
                self._logger.warning(f"Failed to evaluate video {item_id} in {collection.collection_id}: {e}")
                continue

            scored.append(evaluation)
            members.append(
                MemberEvaluation(
                    item_id=evaluation.item_id,
                    title=evaluation.title,
                    composite_score=evaluation.composite_score,
                    is_relevant=evaluation.is_relevant,
                    detected_category=evaluation.detected_category,
                    recommendation=evaluation.recommendation,
                    sub_scores=evaluation.sub_scores,
                    strengths=evaluation.strengths[:MEMBER_HIGHLIGHTS],
                    weaknesses=evaluation.weaknesses[:MEMBER_HIGHLIGHTS],
                    summary=evaluation.summary[:MEMBER_SUMMARY_CHARS],
                )
            )
            if evaluation.is_relevant:
                relevant.append(evaluation)
            else:
                irrelevant.append(
                    IrrelevantMember(
                        item_id=evaluation.item_id,
                        title=evaluation.title,
                        detected_category=evaluation.detected_category,
                    )
                )

        relevant_count = len(relevant)
        irrelevant_count = len(irrelevant)

        average_score = self._average([e.composite_score for e in relevant])
        average_sub_scores = SubScores(
            **{
                name: float(self._average([getattr(e.sub_scores, name) for e in relevant]))
                for name in SubScores.field_names()
            }
        )

        if relevant_count == 0:
            tier = QualityTier.NOT_APPLICABLE
        else:
            tier = self._scoring.quality_tier_for(average_score)

        if irrelevant_count > sampled_count / 2:
            recommendation = Recommendation.CAUTION
        else:
            recommendation = self._scoring.recommendation_for_score(average_score)

        total_seconds = sum(e.duration_seconds for e in scored)
        average_minutes = round_half_up(total_seconds / len(scored) / 60) if scored else 0

        return CollectionAggregate(
            collection_id=collection.collection_id,
            title=collection.title,
            sampled_count=sampled_count,
            relevant_count=relevant_count,
            irrelevant_count=irrelevant_count,
            average_composite_score=average_score,
            average_sub_scores=average_sub_scores,
            quality_tier=tier,
            recommendation=recommendation,
            evaluated_at=self._clock(),
            member_evaluations=tuple(members),
            irrelevant_members=tuple(irrelevant[:MAX_IRRELEVANT_MEMBERS]),
            strengths=_unique((s for e in relevant for s in e.strengths), MAX_STRENGTHS),
            weaknesses=_unique((w for e in relevant for w in e.weaknesses), MAX_WEAKNESSES),
            red_flags=_unique((r for e in relevant for r in e.red_flags), MAX_RED_FLAGS),
            is_relevant_collection=relevant_count > irrelevant_count,
            item_count=collection.item_count,
            total_views=sum(e.statistics.view_count for e in scored),
            total_likes=sum(e.statistics.like_count for e in scored),
            average_duration_minutes=average_minutes,
            summary=build_collection_summary(
                collection, average_score, relevant_count, irrelevant_count, sampled_count
            ),
            category=majority_category(e.detected_category for e in relevant),
            tags=collection_tags(e.detected_category for e in scored),
        )

    @staticmethod
    def _average(values: Sequence[float]) -> int:
        if not values:
            return 0
        return round_half_up(sum(values) / len(values))
