"""Prompt text for tutorial evaluation."""

from collections.abc import Iterable, Sequence

from evaluation_cache.entities import Comment, CommentSignals, VideoMetadata
from evaluation_cache.heuristics import DEFAULT_KEYWORDS, KeywordTable

EXEMPLAR_LIMIT = 5
EXEMPLAR_CHARS = 180
DESCRIPTION_CHARS = 600
TAG_LIMIT = 15

SYSTEM_PROMPT = """You are a fair, evidence-based and critical reviewer of programming tutorials. \
Learners rely on you to find high-quality material and avoid misleading, outdated or low-value content.

Your goal is an accurate assessment, not harshness and not hype.

RELEVANCE CHECK (MANDATORY)
First decide whether the video is genuinely about programming or technical education:
software development, web/mobile/backend/frontend, data science, machine learning, AI,
DevOps, cloud, computer science, algorithms, developer tools.
If it is not (entertainment, vlogs, gaming, music, fitness, news, ...):
- set "isProgrammingTutorial" to false
- set "detectedCategory" to what it actually is
- set every numeric score to 0
- set "overallRecommendation" to "not_applicable"
- explain in the summary that this is not a programming tutorial
and stop there.

EVIDENCE
Positive signals: clear explanations, logical structure, explains why and not only what,
real-world use cases, limitations mentioned, comments reporting success.
Negative signals: repeated confusion, repeated bug reports, repeated "doesn't work" or
"outdated" warnings, misleading claims, title/content mismatch.
Judge by proportion and severity. A few complaints among many positive comments is a
small penalty; highly-liked critical comments matter more than random ones.
Beginner confusion on advanced content is a small penalty at most.

SCORING
Start from a neutral baseline of 6 and move with the evidence.
3-4 bad or misleading, 5 weak, 6 average, 7 good, 8 very good, 9 excellent, 10 exceptional (rare).
Scores must agree with the strengths, weaknesses, summary and recommendation.

OUTPUT
Respond with a single JSON object, exactly these keys:
{
  "isProgrammingTutorial": true,
  "detectedCategory": "<topic or non-programming category>",
  "detectedSubcategory": "<narrower area, e.g. django or react hooks, or empty>",
  "detectedTechnologies": ["<language, framework or tool taught>"],
  "contentQuality": <1-10 or 0>,
  "teachingClarity": <1-10 or 0>,
  "practicalValue": <1-10 or 0>,
  "upToDateScore": <1-10 or 0>,
  "commentSentiment": <1-10 or 0>,
  "overallRecommendation": "<strongly_recommend|recommend|neutral|caution|avoid|not_applicable>",
  "evaluationConfidence": "<low|medium|high>",
  "strengths": ["<specific, evidence-based strength>"],
  "weaknesses": ["<specific, evidence-based weakness>"],
  "redFlags": ["<serious concern, if any>"],
  "recommendedFor": "<who benefits>",
  "notRecommendedFor": "<who should avoid>",
  "summary": "<2-3 sentence honest assessment>"
}

Do not overrate because of popularity. Do not underrate because of a few complaints."""


def _quote(comment: Comment, marker: str) -> str:
    text = comment.text[:EXEMPLAR_CHARS]
    if len(comment.text) > EXEMPLAR_CHARS:
        text += "..."
    return f'  [{marker}] "{text}" ({comment.like_count} likes)'


def _exemplars(
    comments: Sequence[Comment],
    keywords: Iterable[str],
    marker: str,
) -> str:
    keywords = tuple(keywords)
    picked = [c for c in comments if any(kw in c.text.lower() for kw in keywords)]
    return "\n".join(_quote(c, marker) for c in picked[:EXEMPLAR_LIMIT])


def _percent(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole else 0


def build_user_prompt(
    video: VideoMetadata,
    comments: Sequence[Comment],
    signals: CommentSignals,
    keywords: KeywordTable = DEFAULT_KEYWORDS,
) -> str:
    """Build the evaluation request for one video.

    Comments are ordered by like count (stable for ties) before exemplars
    are picked, so the most-liked positive, critical and question comments
    are quoted.

    Args:
        video: Video metadata and statistics
        comments: Raw comments
        signals: Pre-computed comment signals
        keywords: Keyword table used to pick exemplar comments

    Returns:
        The user prompt
    """
    stats = video.statistics
    by_likes = sorted(comments, key=lambda c: c.like_count or 0, reverse=True)

    positive = _exemplars(by_likes, keywords.prompt_positive, "+")
    negative = _exemplars(by_likes, keywords.prompt_negative, "-")
    questions = _exemplars(by_likes, ("?",), "?")

    like_ratio = stats.like_count / stats.view_count * 100 if stats.view_count else 0.0
    comment_ratio = stats.comment_count / stats.view_count * 100 if stats.view_count else 0.0
    description = video.description[:DESCRIPTION_CHARS] or "No description provided"
    tags = ", ".join(video.tags[:TAG_LIMIT]) or "None"

    return f"""EVALUATE THIS PROGRAMMING TUTORIAL CRITICALLY

VIDEO METADATA
Title: {video.title}
Channel: {video.channel_title}
Duration: {video.duration}
Published: {video.published_at or "Unknown"}

Description (first {DESCRIPTION_CHARS} chars):
{description}

Tags: {tags}

ENGAGEMENT STATISTICS
Views: {stats.view_count:,}
Likes: {stats.like_count:,}
Comments: {stats.comment_count:,}
Like Ratio: {like_ratio:.2f}% (typical good: 3-5%)
Comment Ratio: {comment_ratio:.3f}% (typical: 0.1-0.5%)

COMMENT ANALYSIS (pre-processed)
Total Comments Analyzed: {signals.total_analyzed}
Positive Comments: {signals.positive_count} ({_percent(signals.positive_count, signals.total_analyzed)}%)
Negative Comments: {signals.negative_count} ({_percent(signals.negative_count, signals.total_analyzed)}%)
Questions Asked: {signals.question_count}
Complaints: {signals.complaint_count}
Confusion Indicators: {signals.confusion_indicators}
Outdated Mentions: {signals.outdated_indicators}
Overall Sentiment: {signals.overall_sentiment.value.upper()}

POSITIVE COMMENTS (most liked)
{positive or "No clearly positive comments found"}

NEGATIVE/CRITICAL COMMENTS (most liked, pay attention)
{negative or "No clearly negative comments found"}

QUESTIONS FROM VIEWERS
{questions or "No questions found"}

YOUR TASK
Based on all of the above, give an honest evaluation. Check:
1. Is the title clickbait? Does the content likely match the promise?
2. Do comments mention confusion, errors or outdated content?
3. Is the video's age a concern for a fast-moving topic?
4. Do questions suggest key concepts were not explained?
5. Is this educational or just entertainment?

Respond with your JSON evaluation now."""
