"""
Module Name: sound_icons.py
Description:
    Category to icon-name lookup used by the sound listing templates.

Location:
    /utils/sound_icons.py

"""

from typing import Optional

SOUND_ICONS = {
    'calm': 'cloud-rain',
    'happy': 'tree',
    'sad': 'fire',
    'meditation': 'om',
    'all': 'music',
}

DEFAULT_SOUND_ICON = 'music'


def get_sound_icon(category: Optional[str]) -> str:
    """Return the icon name for a mood category, falling back to 'music'."""
    if not isinstance(category, str):
        return DEFAULT_SOUND_ICON
    return SOUND_ICONS.get(category, DEFAULT_SOUND_ICON)
