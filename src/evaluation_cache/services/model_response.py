"""Loose schema for the model's JSON verdict.

The model is asked for a fixed JSON shape but is not trusted to follow it.
Every field has a named default, numbers are coerced and clamped, lists
are bounded, and unknown categorical values fall back to a safe choice.
Only output that is not a JSON object at all is rejected.
"""

import json
import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from evaluation_cache.entities import Recommendation
from evaluation_cache.exceptions import ModelResponseError

DEFAULT_SUB_SCORE = 5.0
MAX_STRENGTHS = 5
MAX_WEAKNESSES = 5
MAX_RED_FLAGS = 3
MAX_TECHNOLOGIES = 10

_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)
_CONFIDENCE_LEVELS = ("low", "medium", "high")
_LIST_LIMITS = {
    "strengths": MAX_STRENGTHS,
    "weaknesses": MAX_WEAKNESSES,
    "red_flags": MAX_RED_FLAGS,
    "detected_technologies": MAX_TECHNOLOGIES,
}


class ModelVerdict(BaseModel):
    """Parsed model evaluation with defaults for every missing field."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    is_relevant: bool = Field(default=True, alias="isProgrammingTutorial")
    detected_category: str = Field(default="programming", alias="detectedCategory")
    detected_subcategory: str = Field(default="", alias="detectedSubcategory")
    detected_technologies: tuple[str, ...] = Field(default=(), alias="detectedTechnologies")
    content_quality: float = Field(default=DEFAULT_SUB_SCORE, alias="contentQuality")
    teaching_clarity: float = Field(default=DEFAULT_SUB_SCORE, alias="teachingClarity")
    practical_value: float = Field(default=DEFAULT_SUB_SCORE, alias="practicalValue")
    up_to_date_score: float = Field(default=DEFAULT_SUB_SCORE, alias="upToDateScore")
    comment_sentiment: float = Field(default=DEFAULT_SUB_SCORE, alias="commentSentiment")
    recommendation: Recommendation = Field(
        default=Recommendation.NEUTRAL, alias="overallRecommendation"
    )
    confidence: str = Field(default="medium", alias="evaluationConfidence")
    strengths: tuple[str, ...] = Field(default=(), alias="strengths")
    weaknesses: tuple[str, ...] = Field(default=(), alias="weaknesses")
    red_flags: tuple[str, ...] = Field(default=(), alias="redFlags")
    recommended_for: str = Field(default="General learners", alias="recommendedFor")
    not_recommended_for: str = Field(default="", alias="notRecommendedFor")
    summary: str = Field(default="", alias="summary")

    @field_validator("is_relevant", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() not in ("false", "no", "0")
        if isinstance(value, (int, float)):
            return value != 0
        return True

    @field_validator(
        "content_quality",
        "teaching_clarity",
        "practical_value",
        "up_to_date_score",
        "comment_sentiment",
        mode="before",
    )
    @classmethod
    def _clamp_score(cls, value: Any) -> float:
        if isinstance(value, bool):
            return DEFAULT_SUB_SCORE
        try:
            number = float(value)
        except (TypeError, ValueError):
            return DEFAULT_SUB_SCORE
        if math.isnan(number):
            return DEFAULT_SUB_SCORE
        return max(0.0, min(10.0, number))

    @field_validator("recommendation", mode="before")
    @classmethod
    def _known_recommendation(cls, value: Any) -> Recommendation:
        try:
            return Recommendation(str(value).strip().lower())
        except ValueError:
            return Recommendation.NEUTRAL

    @field_validator("confidence", mode="before")
    @classmethod
    def _known_confidence(cls, value: Any) -> str:
        text = str(value).strip().lower() if value is not None else ""
        return text if text in _CONFIDENCE_LEVELS else "medium"

    @field_validator("strengths", "weaknesses", "red_flags", "detected_technologies", mode="before")
    @classmethod
    def _bounded_list(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        limit = _LIST_LIMITS[info.field_name]
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return ()
        items = [str(item).strip() for item in value if item is not None and str(item).strip()]
        return tuple(items[:limit])

    @field_validator(
        "detected_category",
        "detected_subcategory",
        "recommended_for",
        "not_recommended_for",
        "summary",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any, info: ValidationInfo) -> str:
        if value is None:
            return cls.model_fields[info.field_name].default
        return str(value).strip()


def strip_code_fences(content: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    match = _FENCE.match(content)
    return match.group(1) if match else content.strip()


def parse_model_verdict(content: str) -> ModelVerdict:
    """Parse raw model output into a ModelVerdict.

    Args:
        content: Assistant message content

    Returns:
        ModelVerdict with defaults for anything missing or malformed

    Raises:
        ModelResponseError: If the content is not a JSON object
    """
    text = strip_code_fences(content or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelResponseError(f"Model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ModelResponseError(f"Model returned {type(data).__name__}, expected an object")

    return ModelVerdict.model_validate(data)
