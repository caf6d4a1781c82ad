"""Keyword-based comment signal extraction."""

from collections.abc import Iterable, Sequence

from evaluation_cache.entities import Comment, CommentSignals, Sentiment
from evaluation_cache.heuristics import (
    DEFAULT_COMMENT_THRESHOLDS,
    DEFAULT_KEYWORDS,
    CommentThresholds,
    KeywordTable,
)

from .scoring_math import round_half_up


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class CommentSignalExtractor:
    """Turns raw comments into counts, exemplar quotes and a sentiment bucket.

    Pure and deterministic: the same comments in the same order always
    produce the same signals.

    Example:
        ```python
        extractor = CommentSignalExtractor()
        signals = extractor.analyze([Comment("Great tutorial, thanks!", 12)])
        signals.overall_sentiment  # Sentiment.VERY_POSITIVE
        ```
    """

    def __init__(
        self,
        keywords: KeywordTable = DEFAULT_KEYWORDS,
        thresholds: CommentThresholds = DEFAULT_COMMENT_THRESHOLDS,
    ) -> None:
        self._keywords = keywords
        self._thresholds = thresholds

    def analyze(self, comments: Sequence[Comment]) -> CommentSignals:
        """Analyze a sequence of comments.

        Business logic:
        1. Lower-case each comment and match keyword substrings
        2. Put each comment in exactly one of positive/negative/neutral
        3. Count independent indicators (questions, confusion, outdated, ...)
        4. Keep the first well-liked concerns and praises as exemplars
        5. Bucket the overall sentiment by positive and negative ratios

        Args:
            comments: Comments in provider order

        Returns:
            CommentSignals (all zeros and ``unknown`` sentiment when empty)
        """
        if not comments:
            return CommentSignals()

        kw = self._keywords
        th = self._thresholds

        positive = negative = neutral = 0
        questions = complaints = praise = 0
        confusion = helpful = outdated = 0
        total_likes = 0
        concerns: list[str] = []
        praises: list[str] = []

        for comment in comments:
            text = comment.text.lower()
            likes = comment.like_count or 0
            total_likes += likes

            has_positive = _contains_any(text, kw.positive)
            has_negative = _contains_any(text, kw.negative)
            if has_positive and not has_negative:
                positive += 1
            elif has_negative and not has_positive:
                negative += 1
            else:
                neutral += 1

            if _contains_any(text, kw.question):
                questions += 1
            if _contains_any(text, kw.confusion):
                confusion += 1
                if likes >= th.confusion_concern_likes:
                    concerns.append(comment.text[: th.concern_chars])
            if _contains_any(text, kw.outdated):
                outdated += 1
                if likes >= th.outdated_concern_likes:
                    concerns.append(
                        f"Outdated content mentioned: {comment.text[: th.outdated_concern_chars]}"
                    )
            if _contains_any(text, kw.praise):
                praise += 1
                helpful += 1
                if likes >= th.praise_likes:
                    praises.append(comment.text[: th.concern_chars])
            if _contains_any(text, kw.complaint):
                complaints += 1
                if likes >= th.complaint_concern_likes:
                    concerns.append(comment.text[: th.concern_chars])

        return CommentSignals(
            total_analyzed=len(comments),
            positive_count=positive,
            negative_count=negative,
            neutral_count=neutral,
            question_count=questions,
            complaint_count=complaints,
            praise_count=praise,
            confusion_indicators=confusion,
            helpful_indicators=helpful,
            outdated_indicators=outdated,
            average_likes=round_half_up(total_likes / len(comments)),
            top_concerns=tuple(concerns[: th.max_exemplars]),
            top_praises=tuple(praises[: th.max_exemplars]),
            overall_sentiment=self._sentiment(positive, negative, neutral),
        )

    def _sentiment(self, positive: int, negative: int, neutral: int) -> Sentiment:
        total = positive + negative + neutral
        if total == 0:
            return Sentiment.UNKNOWN

        th = self._thresholds
        positive_ratio = positive / total
        negative_ratio = negative / total

        if positive_ratio > th.very_positive_ratio:
            return Sentiment.VERY_POSITIVE
        if positive_ratio > th.positive_ratio:
            return Sentiment.POSITIVE
        # very_negative must be checked before negative
        if negative_ratio > th.very_negative_ratio:
            return Sentiment.VERY_NEGATIVE
        if negative_ratio > th.negative_ratio:
            return Sentiment.NEGATIVE
        return Sentiment.MIXED
