"""
Tests for collection-level aggregation.
"""

import asyncio

import pytest

from conftest import FIXED_NOW, make_collection
from evaluation_cache.entities import (
    EngagementStats,
    Evaluation,
    Penalties,
    QualityTier,
    Recommendation,
    SubScores,
)
from evaluation_cache.exceptions import ConfigurationError, ItemNotFoundError
from evaluation_cache.services import CollectionAggregator, QualityScoringEngine


def relevant(
    item_id: str, score: int, strengths=(), weaknesses=(), red_flags=(), summary="", category="python"
) -> Evaluation:
    return Evaluation(
        item_id=item_id,
        title=f"Tutorial {item_id}",
        is_relevant=True,
        detected_category=category,
        sub_scores=SubScores(score / 10, score / 10, score / 10, score / 10, score / 10, float(score)),
        penalties=Penalties(),
        composite_score=score,
        quality_tier=QualityTier.GOOD,
        recommendation=Recommendation.RECOMMEND,
        evaluated_at=FIXED_NOW,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        red_flags=tuple(red_flags),
        summary=summary,
        statistics=EngagementStats(view_count=1_000, like_count=50, comment_count=5),
        duration_seconds=600,
    )


def irrelevant(item_id: str, category: str = "music") -> Evaluation:
    return Evaluation(
        item_id=item_id,
        title=f"Clip {item_id}",
        is_relevant=False,
        detected_category=category,
        sub_scores=SubScores(),
        penalties=Penalties(),
        composite_score=0,
        quality_tier=QualityTier.NOT_APPLICABLE,
        recommendation=Recommendation.NOT_APPLICABLE,
        evaluated_at=FIXED_NOW,
        statistics=EngagementStats(view_count=5_000, like_count=100, comment_count=10),
        duration_seconds=180,
    )


def evaluator_from(results: dict):
    """Member evaluator answering from a table; exception values are raised."""
    calls: list[str] = []

    async def evaluate(item_id: str) -> Evaluation:
        calls.append(item_id)
        result = results[item_id]
        if isinstance(result, Exception):
            raise result
        return result

    return evaluate, calls


def aggregate(results: dict, member_ids=None, sample_size: int = 5):
    evaluate, calls = evaluator_from(results)
    aggregator = CollectionAggregator(
        evaluate_member=evaluate,
        scoring=QualityScoringEngine(),
        sample_size=sample_size,
        clock=lambda: FIXED_NOW,
    )
    ids = list(results) if member_ids is None else member_ids
    return asyncio.run(aggregator.aggregate(make_collection("PL1", title="Mixed Bag", item_count=len(ids)), ids)), calls


def test_majority_off_topic_forces_caution():
    result, _ = aggregate(
        {
            "a": relevant("a", 80),
            "b": irrelevant("b"),
            "c": relevant("c", 70),
            "d": irrelevant("d"),
            "e": irrelevant("e", "gaming"),
        }
    )

    assert result.sampled_count == 5
    assert result.relevant_count == 2
    assert result.irrelevant_count == 3
    assert result.average_composite_score == 75
    assert result.quality_tier is QualityTier.GOOD
    assert result.recommendation is Recommendation.CAUTION
    assert result.is_relevant_collection is False
    assert [m.item_id for m in result.irrelevant_members] == ["b", "d", "e"]
    assert result.summary.startswith('"Mixed Bag" is a playlist with 5 videos. Warning: Most analyzed videos (3/5)')


def test_averages_cover_relevant_members_only():
    result, _ = aggregate({"a": relevant("a", 90), "b": irrelevant("b"), "c": relevant("c", 61)})

    # (90 + 61) / 2 = 75.5 rounds half-up
    assert result.average_composite_score == 76
    assert result.average_sub_scores.engagement == 76
    assert result.recommendation is Recommendation.RECOMMEND
    assert "Note: 1 of 3 analyzed videos are not programming content." in result.summary


def test_no_relevant_members_is_not_applicable():
    result, _ = aggregate({"a": irrelevant("a"), "b": irrelevant("b")})

    assert result.average_composite_score == 0
    assert result.average_sub_scores.is_zero()
    assert result.quality_tier is QualityTier.NOT_APPLICABLE
    assert result.recommendation is Recommendation.CAUTION
    assert result.is_relevant_collection is False


def test_failed_members_are_skipped():
    result, calls = aggregate(
        {
            "a": relevant("a", 72),
            "b": ItemNotFoundError("video", "b"),
            "c": RuntimeError("model timed out"),
            "d": relevant("d", 72),
        }
    )

    assert calls == ["a", "b", "c", "d"]
    assert result.sampled_count == 4
    assert result.relevant_count == 2
    assert result.failed_count == 2
    assert [m.item_id for m in result.member_evaluations] == ["a", "d"]


def test_configuration_error_aborts_aggregate():
    evaluate, _ = evaluator_from({"a": relevant("a", 72), "b": ConfigurationError("no keys")})
    aggregator = CollectionAggregator(evaluate, QualityScoringEngine())

    with pytest.raises(ConfigurationError):
        asyncio.run(aggregator.aggregate(make_collection(), ["a", "b"]))


def test_only_first_members_are_sampled():
    results = {str(i): relevant(str(i), 60) for i in range(8)}

    result, calls = aggregate(results, sample_size=3)

    assert calls == ["0", "1", "2"]
    assert result.sampled_count == 3


def test_highlights_are_deduplicated_and_capped():
    result, _ = aggregate(
        {
            "a": relevant("a", 80, strengths=["Clear", "Fast", "Fun"], red_flags=["Old API"]),
            "b": relevant("b", 80, strengths=["Clear", "Deep", "Visual", "Concise"], red_flags=["Old API", "No audio"]),
            "c": relevant("c", 80, weaknesses=["Long"], red_flags=["Typos", "Ads"]),
        }
    )

    assert result.strengths == ("Clear", "Fast", "Fun", "Deep", "Visual")
    assert result.weaknesses == ("Long",)
    assert result.red_flags == ("Old API", "No audio", "Typos")


def test_member_entries_are_condensed():
    result, _ = aggregate(
        {"a": relevant("a", 80, strengths=["s1", "s2", "s3"], weaknesses=["w1", "w2", "w3"], summary="x" * 400)}
    )

    member = result.member_evaluations[0]
    assert member.strengths == ("s1", "s2")
    assert member.weaknesses == ("w1", "w2")
    assert len(member.summary) == 150


def test_totals_cover_every_scored_member():
    result, _ = aggregate({"a": relevant("a", 80), "b": irrelevant("b")})

    assert result.total_views == 6_000
    assert result.total_likes == 150
    # (600 + 180) / 2 seconds = 6.5 minutes
    assert result.average_duration_minutes == 7


def test_sample_size_must_be_positive():
    with pytest.raises(ValueError):
        CollectionAggregator(evaluator_from({})[0], QualityScoringEngine(), sample_size=0)


def test_collection_is_filed_under_majority_category():
    result, _ = aggregate(
        {
            "a": relevant("a", 80, category="React"),
            "b": relevant("b", 80, category="Python"),
            "c": relevant("c", 80, category="Node.js backend"),
            "d": irrelevant("d", "music"),
            "e": irrelevant("e", "music"),
        }
    )

    assert result.category == "web-dev"
    assert result.tags == ("react", "python", "node.js backend", "music")


def test_category_ties_go_to_first_seen():
    result, _ = aggregate({"a": relevant("a", 80, category="docker"), "b": relevant("b", 80, category="flutter")})

    assert result.category == "devops"


def test_collection_without_relevant_members_is_other():
    result, _ = aggregate({"a": irrelevant("a"), "b": irrelevant("b", "gaming")})

    assert result.category == "other"
