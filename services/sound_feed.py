"""
Module Name: sound_feed.py
Description:
    Loads public sound listings for the home page and mood pages. Every load
    returns a SoundFeedResult: either the transformed sounds, or an empty list
    with a user-safe failure reason. Driver errors never escape to the views.

Location:
    /services/sound_feed.py

"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from services.database.sounds import with_full_urls
from utils.logger import get_module_logger

LOAD_FAILED_MESSAGE = "Failed to load sounds"


@dataclass(frozen=True)
class SoundFeedResult:
    sounds: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, sounds: List[Dict[str, Any]]) -> 'SoundFeedResult':
        return cls(sounds=sounds)

    @classmethod
    def failure(cls, reason: str = LOAD_FAILED_MESSAGE) -> 'SoundFeedResult':
        return cls(sounds=[], error=reason)


class SoundFeed:
    """Fetch-and-transform flow behind the public sound listings."""

    def __init__(self, database_service, home_limit: int = 12, mood_limit: int = 50, logger=None):
        self.database_service = database_service
        self.home_limit = home_limit
        self.mood_limit = mood_limit
        self.logger = logger or get_module_logger("Service.SoundFeed")

    def load_home(self) -> SoundFeedResult:
        """Newest public sounds across every category."""
        return self._load(category=None, limit=self.home_limit)

    def load_mood(self, category: str) -> SoundFeedResult:
        """Newest public sounds for one mood ('all' means no filter)."""
        return self._load(category=category, limit=self.mood_limit)

    def _load(self, category: Optional[str], limit: int) -> SoundFeedResult:
        try:
            sounds = self.database_service.get_public_sounds(limit=limit, category=category)
            return SoundFeedResult.success(with_full_urls(sounds))
        except Exception as e:
            self.logger.exception(f"Error fetching sounds (category={category or 'all'}): {e}")
            return SoundFeedResult.failure()
