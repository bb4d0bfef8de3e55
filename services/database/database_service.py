from typing import Any, Callable, Dict, List, Optional

from pymongo.errors import PyMongoError

from utils.logger import get_module_logger
from .connection import DatabaseConnection
from .sounds import SoundOperations
from .users import UserOperations


class DatabaseService:
    """Service for database operations with modular components"""

    def __init__(self, uri: str, timeout_ms: int = 5000, client_factory: Optional[Callable] = None):
        self.logger = get_module_logger("DatabaseService.Main")

        # Initialize modular components
        self.connection_manager = DatabaseConnection(uri, timeout_ms=timeout_ms, client_factory=client_factory)
        self.sounds = SoundOperations(self.connection_manager)
        self.users = UserOperations(self.connection_manager)
        self.connected = False

    def initialize(self) -> bool:
        """Connect and create indexes. Failures are logged, never raised."""
        try:
            self.connection_manager.connect()
            self.users.ensure_indexes()
            self.sounds.ensure_indexes()
            self.connected = True
            self.logger.success(f"MongoDB connected successfully: {self.connection_manager.database_name}")
        except PyMongoError as e:
            self.connected = False
            self.logger.error(f"MongoDB connection error: {e}")
        return self.connected

    def close(self):
        self.connection_manager.close()
        self.connected = False

    # Connection methods
    @property
    def db(self):
        return self.connection_manager.db

    def test_connection(self) -> bool:
        """Test database connection."""
        return self.connection_manager.test_connection()

    # Sound operation methods (delegate to sounds module)
    def get_public_sounds(self, limit: Optional[int] = None, category: Optional[str] = None) -> List[Dict]:
        """Get public sounds, newest first."""
        return self.sounds.get_public_sounds(limit=limit, category=category)

    def get_sounds_by_uploader(self, user_id, include_private: bool = False) -> List[Dict]:
        """Get all sounds uploaded by a user."""
        return self.sounds.get_sounds_by_uploader(user_id, include_private=include_private)

    def get_sound(self, sound_id) -> Optional[Dict]:
        """Get a specific sound by ID."""
        return self.sounds.get_sound(sound_id)

    def create_sound(self, sound_data: Dict[str, Any]) -> Dict:
        """Add a sound to the database."""
        return self.sounds.create_sound(sound_data)

    def delete_sound(self, sound_id) -> bool:
        """Delete a sound from the database."""
        return self.sounds.delete_sound(sound_id)

    # User operation methods (delegate to users module)
    def get_user(self, user_id) -> Optional[Dict]:
        return self.users.get_user(user_id)

    def get_user_by_username(self, username: str) -> Optional[Dict]:
        return self.users.get_user_by_username(username)

    def user_exists(self, username: str, email: str) -> bool:
        return self.users.user_exists(username, email)

    def create_user(self, username: str, email: str, password: str) -> Dict:
        return self.users.create_user(username, email, password)

    def verify_user(self, login: str, password: str) -> Optional[Dict]:
        return self.users.verify_user(login, password)
