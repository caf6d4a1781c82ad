"""
Tests for cache key normalization.
"""

import pytest

from evaluation_cache.keys import make_cache_key, make_item_key


def test_name_and_context_keys_are_case_folded():
    assert make_cache_key("Backend Developer", None) == "backend developer_general"
    assert make_cache_key(" backend developer ", "") == make_cache_key("Backend Developer", None)


def test_cache_key_requires_a_part():
    with pytest.raises(ValueError):
        make_cache_key()


def test_item_key_keeps_id_case():
    assert make_item_key("video", " dQw4w9WgXcQ ") == "video_dQw4w9WgXcQ"
    assert make_item_key("Playlist", "PLabc") == "playlist_PLabc"
    assert make_item_key("video", "abc") != make_item_key("video", "ABC")


def test_item_key_rejects_empty_id():
    with pytest.raises(ValueError):
        make_item_key("video", "   ")
