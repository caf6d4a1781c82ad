"""Comment signal domain entity."""

from dataclasses import dataclass

from .enums import Sentiment


@dataclass(frozen=True)
class CommentSignals:
    """Heuristic signals derived from a set of comments.

    Counts are independent: a comment can be both a question and a
    confusion indicator. Only positive/negative/neutral partition the set.
    """

    total_analyzed: int = 0
    positive_count: int = 0
    negative_count: int = 0
    neutral_count: int = 0
    question_count: int = 0
    complaint_count: int = 0
    praise_count: int = 0
    confusion_indicators: int = 0
    helpful_indicators: int = 0
    outdated_indicators: int = 0
    average_likes: int = 0
    top_concerns: tuple[str, ...] = ()
    top_praises: tuple[str, ...] = ()
    overall_sentiment: Sentiment = Sentiment.UNKNOWN

    @property
    def confusion_ratio(self) -> float:
        """Share of analyzed comments that signal confusion."""
        if self.total_analyzed == 0:
            return 0.0
        return self.confusion_indicators / self.total_analyzed
