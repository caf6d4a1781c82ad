"""Collection aggregate domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from .enums import QualityTier, Recommendation
from .evaluation import SubScores


@dataclass(frozen=True)
class MemberEvaluation:
    """Condensed view of one sampled member's evaluation."""

    item_id: str
    title: str
    composite_score: int
    is_relevant: bool
    detected_category: str
    recommendation: Recommendation
    sub_scores: SubScores = field(default_factory=SubScores)
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class IrrelevantMember:
    """A sampled member that was classified as off-topic."""

    item_id: str
    title: str
    detected_category: str


@dataclass(frozen=True)
class CollectionAggregate:
    """Aggregate verdict over a bounded sample of a collection's members.

    ``average_composite_score`` and ``average_sub_scores`` cover relevant
    members only. Members whose evaluation failed are counted in
    ``sampled_count`` but in neither ``relevant_count`` nor
    ``irrelevant_count``.
    ``category`` is the most common catalog category among relevant members.
    """

    collection_id: str
    title: str
    sampled_count: int
    relevant_count: int
    irrelevant_count: int
    average_composite_score: int
    average_sub_scores: SubScores
    quality_tier: QualityTier
    recommendation: Recommendation
    evaluated_at: datetime
    member_evaluations: tuple[MemberEvaluation, ...] = ()
    irrelevant_members: tuple[IrrelevantMember, ...] = ()
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()
    is_relevant_collection: bool = False
    item_count: int = 0
    total_views: int = 0
    total_likes: int = 0
    average_duration_minutes: int = 0
    summary: str = ""
    category: str = "other"
    tags: tuple[str, ...] = ()

    @property
    def failed_count(self) -> int:
        """Sampled members that produced no evaluation."""
        return self.sampled_count - self.relevant_count - self.irrelevant_count
