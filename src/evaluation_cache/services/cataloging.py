"""Catalog labels for durably cached results.

A model-detected category is free text ("Python / Django", "React hooks").
Cached entries are filed under a small fixed set of catalog categories
instead, plus a handful of lowercase tags.
"""

from collections import Counter
from collections.abc import Iterable

OTHER_CATEGORY = "other"
MAX_TAGS = 10
MAX_VIDEO_TAGS = 5

# First match wins
CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("web-dev", ("web", "frontend", "backend", "react", "node", "javascript")),
    ("python", ("python",)),
    ("java", ("java",)),
    ("data-science", ("data", "ml", "machine learning", "ai")),
    ("dsa", ("dsa", "algorithm", "data structure")),
    ("devops", ("devops", "docker", "kubernetes", "cloud")),
    ("mobile", ("mobile", "android", "ios", "flutter")),
)


def map_to_category(detected_category: str | None) -> str:
    """Map a detected category onto a catalog category.

    Matching is by lowercase substring; anything unmatched is ``other``.
    """
    if not detected_category:
        return OTHER_CATEGORY

    text = detected_category.lower()
    for category, needles in CATEGORY_RULES:
        if any(needle in text for needle in needles):
            return category
    return OTHER_CATEGORY


def _tags(values: Iterable[str]) -> tuple[str, ...]:
    cleaned = (value.strip().lower() for value in values if value and value.strip())
    return tuple(dict.fromkeys(cleaned))[:MAX_TAGS]


def extract_tags(
    detected_category: str,
    technologies: Iterable[str] = (),
    video_tags: Iterable[str] = (),
) -> tuple[str, ...]:
    """Tags for a single video.

    Detected technologies first, then the detected category, then the
    first few uploader tags. Lowercased, deduplicated and capped.
    """
    return _tags([*technologies, detected_category, *list(video_tags)[:MAX_VIDEO_TAGS]])


def majority_category(detected_categories: Iterable[str]) -> str:
    """Most common catalog category; ties go to the first one seen."""
    counts = Counter(map_to_category(category) for category in detected_categories)
    if not counts:
        return OTHER_CATEGORY
    return counts.most_common(1)[0][0]


def collection_tags(detected_categories: Iterable[str]) -> tuple[str, ...]:
    """Tags for a collection: its members' detected categories."""
    return _tags(detected_categories)
