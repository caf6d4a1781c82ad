"""
Tests for comment signal extraction.
"""

from evaluation_cache.entities import Comment, Sentiment
from evaluation_cache.services import CommentSignalExtractor, QualityScoringEngine

extractor = CommentSignalExtractor()


def test_empty_comments_yield_zero_signals():
    signals = extractor.analyze([])

    assert signals.total_analyzed == 0
    assert signals.positive_count == 0
    assert signals.negative_count == 0
    assert signals.neutral_count == 0
    assert signals.average_likes == 0
    assert signals.top_concerns == ()
    assert signals.top_praises == ()
    assert signals.overall_sentiment is Sentiment.UNKNOWN


def test_mostly_positive_comments_with_one_outdated_mention():
    comments = (
        [Comment("great video", 2)] * 3
        + [Comment("so helpful, thanks", 1)] * 3
        + [Comment("this is outdated", 0)]
        + [Comment("first", 0), Comment("watching from Brazil", 0), Comment("nice intro", 0)]
    )

    signals = extractor.analyze(comments)

    assert signals.total_analyzed == 10
    assert signals.positive_count == 6
    assert signals.outdated_indicators == 1
    assert signals.confusion_indicators == 0

    penalties = QualityScoringEngine().penalties(signals)
    assert 0 < penalties.outdated < 10
    assert penalties.confusion == 0


def test_each_comment_counts_once_in_sentiment_partition():
    comments = [
        Comment("great tutorial", 0),
        Comment("terrible audio", 0),
        Comment("great content but terrible audio", 0),
        Comment("first", 0),
    ]

    signals = extractor.analyze(comments)

    assert signals.positive_count == 1
    assert signals.negative_count == 1
    assert signals.neutral_count == 2
    assert signals.positive_count + signals.negative_count + signals.neutral_count == len(comments)


def test_concerns_require_enough_likes_and_keep_insertion_order():
    comments = [
        Comment("I am so confused by this part", 4),
        Comment("I am confused at minute 5", 6),
        Comment("deprecated since v3", 3),
        Comment("too fast for me", 5),
        Comment("still confused", 20),
    ]

    signals = extractor.analyze(comments)

    assert signals.top_concerns == (
        "I am confused at minute 5",
        "Outdated content mentioned: deprecated since v3",
        "too fast for me",
    )
    assert signals.confusion_indicators == 3
    assert signals.complaint_count == 1


def test_praises_need_ten_likes():
    comments = [
        Comment("best tutorial on youtube", 10),
        Comment("thank you so much", 9),
    ]

    signals = extractor.analyze(comments)

    assert signals.praise_count == 2
    assert signals.helpful_indicators == 2
    assert signals.top_praises == ("best tutorial on youtube",)


def test_concern_text_is_truncated():
    long_text = "confused " * 40
    signals = extractor.analyze([Comment(long_text, 50)])

    assert signals.top_concerns == (long_text[:150],)


def test_average_likes_rounds_half_up():
    signals = extractor.analyze([Comment("a", 1), Comment("b", 2)])

    assert signals.average_likes == 2


def test_sentiment_buckets():
    positive = Comment("great", 0)
    negative = Comment("terrible", 0)
    neutral = Comment("first", 0)

    assert extractor.analyze([positive] * 8 + [neutral] * 2).overall_sentiment is Sentiment.VERY_POSITIVE
    assert extractor.analyze([positive] * 6 + [neutral] * 4).overall_sentiment is Sentiment.POSITIVE
    assert extractor.analyze([negative] * 7 + [neutral] * 3).overall_sentiment is Sentiment.VERY_NEGATIVE
    assert extractor.analyze([negative] * 5 + [neutral] * 5).overall_sentiment is Sentiment.NEGATIVE
    assert extractor.analyze([positive] * 5 + [negative] * 3 + [neutral] * 2).overall_sentiment is Sentiment.MIXED


def test_analysis_is_deterministic():
    comments = [Comment("great but confusing?", 7), Comment("deprecated", 4)]

    assert extractor.analyze(comments) == extractor.analyze(list(comments))
