"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from evaluation_cache.entities import QualityTier, Recommendation, Sentiment


class SubScoresResponse(BaseModel):
    """Score breakdown of an evaluation or aggregate."""

    model_config = ConfigDict(from_attributes=True)

    content_quality: float = Field(..., description="Content accuracy and depth (0-10)", ge=0.0, le=10.0)
    teaching_clarity: float = Field(..., description="How well it teaches (0-10)", ge=0.0, le=10.0)
    practical_value: float = Field(..., description="Real-world usefulness (0-10)", ge=0.0, le=10.0)
    up_to_date_score: float = Field(..., description="How current the content is (0-10)", ge=0.0, le=10.0)
    comment_sentiment: float = Field(..., description="Community feedback (0-10)", ge=0.0, le=10.0)
    engagement: float = Field(..., description="Engagement computed from counts (0-100)", ge=0.0, le=100.0)


class PenaltiesResponse(BaseModel):
    """Deductions applied to the composite score."""

    model_config = ConfigDict(from_attributes=True)

    outdated: float = Field(..., description="Penalty for outdated-content comments", ge=0.0)
    confusion: float = Field(..., description="Penalty for confused-viewer comments", ge=0.0)


class EngagementStatsResponse(BaseModel):
    """Raw engagement counters."""

    model_config = ConfigDict(from_attributes=True)

    view_count: int = Field(..., ge=0)
    like_count: int = Field(..., ge=0)
    comment_count: int = Field(..., ge=0)


class EvaluationResponse(BaseModel):
    """Response DTO for a single video evaluation."""

    model_config = ConfigDict(from_attributes=True)

    item_id: str = Field(..., description="Video id")
    title: str = Field(..., description="Video title")
    is_relevant: bool = Field(..., description="Whether the video is a programming tutorial")
    detected_category: str = Field(..., description="Topic, or the non-programming category")
    category: str = Field("other", description="Catalog category")
    subcategory: str = ""
    tags: list[str] = Field(default_factory=list)
    composite_score: int = Field(..., description="Composite quality score", ge=0, le=100)
    quality_tier: QualityTier = Field(..., description="Step-function bucket of the composite score")
    recommendation: Recommendation = Field(..., description="Recommendation category")
    confidence: str = Field(..., description="Model confidence: low, medium or high")
    sub_scores: SubScoresResponse
    penalties: PenaltiesResponse
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)
    recommended_for: str = ""
    not_recommended_for: str = ""
    summary: str = ""
    comment_sentiment: Sentiment = Field(..., description="Overall comment sentiment bucket")
    top_concerns: list[str] = Field(default_factory=list)
    comments_analyzed: int = Field(0, ge=0)
    statistics: EngagementStatsResponse
    duration_seconds: int = Field(0, ge=0)
    evaluated_at: datetime


class MemberEvaluationResponse(BaseModel):
    """One sampled playlist member."""

    model_config = ConfigDict(from_attributes=True)

    item_id: str
    title: str
    composite_score: int = Field(..., ge=0, le=100)
    is_relevant: bool
    detected_category: str
    recommendation: Recommendation
    sub_scores: SubScoresResponse
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    summary: str = ""


class IrrelevantMemberResponse(BaseModel):
    """A sampled member that is not a programming tutorial."""

    model_config = ConfigDict(from_attributes=True)

    item_id: str
    title: str
    detected_category: str


class CollectionAggregateResponse(BaseModel):
    """Response DTO for a playlist evaluation."""

    model_config = ConfigDict(from_attributes=True)

    collection_id: str = Field(..., description="Playlist id")
    title: str = Field(..., description="Playlist title")
    item_count: int = Field(0, description="Videos in the playlist", ge=0)
    sampled_count: int = Field(..., description="Videos sampled for evaluation", ge=0)
    relevant_count: int = Field(..., ge=0)
    irrelevant_count: int = Field(..., ge=0)
    average_composite_score: int = Field(..., description="Average over relevant videos", ge=0, le=100)
    average_sub_scores: SubScoresResponse
    quality_tier: QualityTier
    recommendation: Recommendation
    is_relevant_collection: bool = Field(..., description="More relevant than irrelevant videos")
    category: str = Field("other", description="Most common catalog category of relevant videos")
    tags: list[str] = Field(default_factory=list)
    member_evaluations: list[MemberEvaluationResponse] = Field(default_factory=list)
    irrelevant_members: list[IrrelevantMemberResponse] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)
    total_views: int = Field(0, ge=0)
    total_likes: int = Field(0, ge=0)
    average_duration_minutes: int = Field(0, ge=0)
    summary: str = ""
    evaluated_at: datetime


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    store_healthy: bool = Field(..., description="Whether the durable store is reachable")
    credentials_configured: int = Field(..., description="Number of model API keys configured", ge=0)


class ErrorResponse(BaseModel):
    """Error body returned with non-2xx statuses."""

    detail: str = Field(..., description="Human-readable error message")
