"""
Module Name: service_manager.py
Description:
    Service container for backend services. One ServiceManager is built per
    Flask app, initialized at startup (connect) and closed at shutdown.

Location:
    /services/service_manager.py

"""

import threading
from typing import Any, Callable, Dict, Optional

from flask import current_app

from utils.logger import get_module_logger


_LOGGER = get_module_logger("Service.Manager")

EXTENSION_KEY = 'soundboard_services'


class ServiceManager:
    """
    Holds the service instances for one application.
    Each service is created once, on first access, with thread-safe guards.
    """

    def __init__(self, config: Dict[str, Any], *, client_factory: Optional[Callable] = None, logger=None):
        self.config = config
        self.client_factory = client_factory
        self.logger = logger or _LOGGER
        self._services: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def _log_initialized(self, service_name: str):
        self.logger.debug(f"Service initialized: {service_name}")

    def get_database_service(self):
        """Get or create DatabaseService instance"""
        if 'database' not in self._services:
            with self._lock:
                if 'database' not in self._services:
                    # Import here to avoid circular imports
                    from services.database import DatabaseService
                    self._services['database'] = DatabaseService(
                        self.config['MONGODB_URI'],
                        timeout_ms=self.config.get('MONGODB_TIMEOUT_MS', 5000),
                        client_factory=self.client_factory,
                    )
                    self._log_initialized("database")
        return self._services['database']

    def get_sound_feed(self):
        """Get or create SoundFeed instance"""
        if 'sound_feed' not in self._services:
            database_service = self.get_database_service()
            with self._lock:
                if 'sound_feed' not in self._services:
                    from services.sound_feed import SoundFeed
                    self._services['sound_feed'] = SoundFeed(
                        database_service,
                        home_limit=self.config.get('HOME_SOUND_LIMIT', 12),
                        mood_limit=self.config.get('MOOD_SOUND_LIMIT', 50),
                    )
                    self._log_initialized("sound_feed")
        return self._services['sound_feed']

    def get_upload_storage(self):
        """Get or create UploadStorage instance"""
        if 'upload_storage' not in self._services:
            with self._lock:
                if 'upload_storage' not in self._services:
                    from services.upload_storage import UploadStorage
                    self._services['upload_storage'] = UploadStorage(
                        self.config['UPLOAD_FOLDER'],
                        url_prefix=self.config.get('UPLOAD_URL_PREFIX', '/static/uploads'),
                        allowed_extensions=self.config.get('ALLOWED_AUDIO_EXTENSIONS'),
                    )
                    self._log_initialized("upload_storage")
        return self._services['upload_storage']

    def init(self) -> bool:
        """Connect the database. The app keeps running when this fails."""
        connected = self.get_database_service().initialize()
        self.get_upload_storage().ensure_folder()
        return connected

    def close(self):
        """Release every service that holds external resources."""
        with self._lock:
            database_service = self._services.get('database')
            if database_service is not None:
                database_service.close()
            self._services.clear()
        self.logger.info("Services closed")


def get_services() -> ServiceManager:
    """ServiceManager bound to the current Flask app"""
    return current_app.extensions[EXTENSION_KEY]

def get_database_service():
    """Get DatabaseService instance"""
    return get_services().get_database_service()

def get_sound_feed():
    """Get SoundFeed instance"""
    return get_services().get_sound_feed()

def get_upload_storage():
    """Get UploadStorage instance"""
    return get_services().get_upload_storage()
