# Services package for the soundboard Flask app

from .database import DatabaseService
from .service_manager import ServiceManager
from .sound_feed import SoundFeed, SoundFeedResult
from .upload_storage import UploadStorage

__all__ = [
    # Core services
    'DatabaseService',
    'SoundFeed',
    'SoundFeedResult',
    'UploadStorage',

    # Service manager
    'ServiceManager',
]
