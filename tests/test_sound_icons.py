"""
Tests for the category to icon lookup.
"""

import pytest

from utils.sound_icons import get_sound_icon


@pytest.mark.parametrize(
    "category,icon",
    [
        ("calm", "cloud-rain"),
        ("happy", "tree"),
        ("sad", "fire"),
        ("meditation", "om"),
        ("all", "music"),
    ],
)
def test_known_categories(category, icon):
    assert get_sound_icon(category) == icon


@pytest.mark.parametrize("category", ["unknown-value", "other", "", "CALM", None, 42])
def test_anything_else_falls_back_to_music(category):
    assert get_sound_icon(category) == "music"
