"""Cache key normalization."""

DEFAULT_KEY_PART = "general"


def make_cache_key(*parts: str | None) -> str:
    """Build a normalized, case-folded cache key from natural identifiers.

    Parts are stripped and case-folded; empty parts become ``general`` so
    that ``("Backend Developer", None)`` and ``("backend developer ", "")``
    map to the same key.

    Args:
        parts: One or more identifiers (e.g. item kind and id, or name and context)

    Returns:
        The parts joined with ``_``

    Raises:
        ValueError: If no parts are given
    """
    if not parts:
        raise ValueError("At least one key part is required")

    normalized = []
    for part in parts:
        value = (part or "").strip().casefold()
        normalized.append(value or DEFAULT_KEY_PART)
    return "_".join(normalized)


def make_item_key(kind: str, item_id: str) -> str:
    """Build a cache key for a platform item id.

    Video and playlist ids are case-sensitive, so only ``kind`` is
    normalized; the id is stripped and kept as given.

    Args:
        kind: Item kind, e.g. ``video`` or ``playlist``
        item_id: Platform id

    Returns:
        ``<kind>_<item_id>``

    Raises:
        ValueError: If the id is empty
    """
    value = (item_id or "").strip()
    if not value:
        raise ValueError("Item id must not be empty")
    return f"{make_cache_key(kind)}_{value}"
