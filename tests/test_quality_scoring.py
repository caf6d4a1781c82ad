"""
Tests for the composite quality scoring engine.
"""

import pytest

from conftest import FIXED_NOW, good_verdict, make_video, off_topic_verdict
from evaluation_cache.entities import (
    CommentSignals,
    EngagementStats,
    QualityTier,
    Recommendation,
    Sentiment,
    SubScores,
)
from evaluation_cache.heuristics import HEURISTICS_VERSION
from evaluation_cache.services import ModelVerdict, QualityScoringEngine

engine = QualityScoringEngine(clock=lambda: FIXED_NOW)
no_signals = CommentSignals()


def verdict(**overrides) -> ModelVerdict:
    return ModelVerdict.model_validate(good_verdict(**overrides))


# Engagement


def test_engagement_zero_views():
    assert engine.engagement_score(EngagementStats(0, 100, 10)) == 0


def test_engagement_tiers():
    # like ratio 4% -> 85, comment ratio 0.2% -> 60, views > 100k -> +10
    stats = EngagementStats(view_count=200_000, like_count=8_000, comment_count=400)

    assert engine.engagement_score(stats) == pytest.approx(85 * 0.5 + 60 * 0.35 + 10)


def test_engagement_below_lowest_tier_is_linear():
    # like ratio 0.5% -> 20, comment ratio 0.05% -> 30, views not above 1000
    stats = EngagementStats(view_count=1_000, like_count=5, comment_count=0)

    assert engine.engagement_score(stats) == pytest.approx(0.5 * 40 * 0.5)


def test_engagement_caps_at_100():
    stats = EngagementStats(view_count=2_000_000, like_count=200_000, comment_count=20_000)

    assert engine.engagement_score(stats) == 100


def test_view_bonus_uses_strictly_greater():
    at_threshold = EngagementStats(view_count=1_000_000, like_count=0, comment_count=0)
    above = EngagementStats(view_count=1_000_001, like_count=0, comment_count=0)

    assert engine.engagement_score(at_threshold) == 12
    assert engine.engagement_score(above) == 15


# Composite


def test_perfect_inputs_score_100():
    perfect = SubScores(10, 10, 10, 10, 10, 100)

    assert engine.composite(perfect, no_signals, Recommendation.RECOMMEND) == 100


def test_composite_is_clamped_to_100():
    perfect = SubScores(10, 10, 10, 10, 10, 100)

    assert engine.composite(perfect, no_signals, Recommendation.STRONGLY_RECOMMEND) == 100


def test_composite_is_clamped_to_zero():
    signals = CommentSignals(total_analyzed=4, confusion_indicators=4, outdated_indicators=5)

    assert engine.composite(SubScores(), signals, Recommendation.AVOID) == 0


def test_composite_rounds_half_up():
    sub_scores = SubScores(5, 5, 5, 5, 4, 5)  # 44.5

    assert engine.composite(sub_scores, no_signals, Recommendation.RECOMMEND) == 45


def test_penalties_and_multiplier():
    sub_scores = SubScores(8, 8, 8, 8, 8, 50)  # 72 + 5 = 77
    signals = CommentSignals(total_analyzed=10, outdated_indicators=3, confusion_indicators=3)

    penalties = engine.penalties(signals)

    assert penalties.outdated == 10
    assert penalties.confusion == 10
    # (77 - 20) * 0.85 = 48.45
    assert engine.composite(sub_scores, signals, Recommendation.CAUTION) == 48


def test_confusion_ratio_thresholds_are_exclusive():
    assert engine.penalties(CommentSignals(total_analyzed=10, confusion_indicators=1)).confusion == 0
    assert engine.penalties(CommentSignals(total_analyzed=10, confusion_indicators=2)).confusion == 5
    assert engine.penalties(CommentSignals(total_analyzed=10, confusion_indicators=3)).confusion == 10


def test_unknown_recommendation_multiplies_by_one():
    sub_scores = SubScores(6, 6, 6, 6, 6, 0)

    assert engine.composite(sub_scores, no_signals, "something_else") == engine.composite(
        sub_scores, no_signals, Recommendation.RECOMMEND
    )


@pytest.mark.parametrize("field", SubScores.field_names())
def test_composite_is_monotonic_in_each_sub_score(field):
    base = dict(content_quality=6, teaching_clarity=6, practical_value=6,
                up_to_date_score=6, comment_sentiment=6, engagement=50)
    lower = SubScores(**base)
    higher = SubScores(**{**base, field: base[field] + 2})

    assert engine.composite(higher, no_signals, Recommendation.NEUTRAL) >= engine.composite(
        lower, no_signals, Recommendation.NEUTRAL
    )


# Tiers and recommendations


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (100, QualityTier.EXCELLENT),
        (85, QualityTier.EXCELLENT),
        (84, QualityTier.GOOD),
        (70, QualityTier.GOOD),
        (69, QualityTier.AVERAGE),
        (55, QualityTier.AVERAGE),
        (54, QualityTier.BELOW_AVERAGE),
        (40, QualityTier.BELOW_AVERAGE),
        (39, QualityTier.POOR),
        (0, QualityTier.POOR),
    ],
)
def test_quality_tier_boundaries(score, tier):
    assert engine.quality_tier_for(score) is tier


@pytest.mark.parametrize(
    ("score", "recommendation"),
    [
        (80, Recommendation.STRONGLY_RECOMMEND),
        (79, Recommendation.RECOMMEND),
        (70, Recommendation.RECOMMEND),
        (69, Recommendation.NEUTRAL),
        (40, Recommendation.NEUTRAL),
        (39, Recommendation.AVOID),
    ],
)
def test_recommendation_for_score(score, recommendation):
    assert engine.recommendation_for_score(score) is recommendation


# Full scoring


def test_score_relevant_video():
    video = make_video()
    evaluation = engine.score(verdict(), video, no_signals)

    # engagement 73.5 -> 7.35 + 16 + 20 + 14 + 10.5 + 8 = 75.85
    assert evaluation.composite_score == 76
    assert evaluation.quality_tier is QualityTier.GOOD
    assert evaluation.recommendation is Recommendation.RECOMMEND
    assert evaluation.sub_scores.engagement == pytest.approx(73.5)
    assert evaluation.statistics == video.statistics
    assert evaluation.evaluated_at == FIXED_NOW
    assert evaluation.heuristics_version == HEURISTICS_VERSION
    assert evaluation.strengths == ("Clear explanations", "Good pacing")


def test_irrelevant_verdict_zeroes_everything():
    model_verdict = ModelVerdict.model_validate(
        {**off_topic_verdict("gaming"), "contentQuality": 9, "teachingClarity": 9}
    )
    signals = CommentSignals(total_analyzed=10, outdated_indicators=5, overall_sentiment=Sentiment.POSITIVE)

    evaluation = engine.score(model_verdict, make_video(), signals)

    assert evaluation.is_relevant is False
    assert evaluation.composite_score == 0
    assert evaluation.sub_scores.is_zero()
    assert evaluation.penalties.total == 0
    assert evaluation.quality_tier is QualityTier.NOT_APPLICABLE
    assert evaluation.recommendation is Recommendation.NOT_APPLICABLE
    assert evaluation.red_flags == ("This is not a programming tutorial. Detected category: gaming",)
    assert "gaming" in evaluation.summary


def test_scoring_is_deterministic():
    video = make_video()
    signals = CommentSignals(total_analyzed=10, outdated_indicators=1, confusion_indicators=2)

    assert engine.score(verdict(), video, signals) == engine.score(verdict(), video, signals)


def test_score_attaches_catalog_labels():
    video = make_video(tags=("Django", "REST", "python", "api", "web", "backend", "extra"))

    evaluation = engine.score(
        verdict(detectedCategory="Python / Django", detectedSubcategory="django", detectedTechnologies=["Python"]),
        video,
        no_signals,
    )

    assert evaluation.category == "python"
    assert evaluation.subcategory == "django"
    assert evaluation.tags == ("python", "python / django", "django", "rest", "api", "web")


def test_irrelevant_verdict_is_filed_under_other():
    evaluation = engine.score(ModelVerdict.model_validate(off_topic_verdict("music")), make_video(), no_signals)

    assert evaluation.category == "other"
    assert evaluation.tags == ("music",)
