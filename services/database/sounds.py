from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from pymongo import DESCENDING

from utils.logger import get_module_logger
from .error_handling import error_handler

if TYPE_CHECKING:
    from .connection import DatabaseConnection

SOUND_CATEGORIES = ('calm', 'happy', 'sad', 'meditation', 'other')


class SoundOperations:
    """Handles all sound-related database operations"""

    collection_name = 'sounds'

    def __init__(self, connection_manager: 'DatabaseConnection'):
        self.connection_manager = connection_manager
        self.logger = get_module_logger("DatabaseService.Sounds")

    @property
    def collection(self):
        return self.connection_manager.db[self.collection_name]

    @property
    def users(self):
        return self.connection_manager.db['users']

    def ensure_indexes(self):
        self.collection.create_index([('isPublic', 1), ('createdAt', DESCENDING)])
        self.collection.create_index([('uploader', 1), ('createdAt', DESCENDING)])

    def _populate_uploaders(self, sounds: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Replace each uploader id with {_id, username}; unknown uploaders become None."""
        uploader_ids = {sound.get('uploader') for sound in sounds if sound.get('uploader') is not None}
        if not uploader_ids:
            for sound in sounds:
                sound['uploader'] = None
            return sounds

        users_by_id = {
            user['_id']: user
            for user in self.users.find({'_id': {'$in': list(uploader_ids)}}, {'username': 1})
        }
        for sound in sounds:
            sound['uploader'] = users_by_id.get(sound.get('uploader'))
        return sounds

    def _find(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        cursor = self.collection.find(query).sort('createdAt', DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return self._populate_uploaders(list(cursor))

    @error_handler.wrap_errors("list public sounds")
    def get_public_sounds(self, limit: Optional[int] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """Public sounds, newest first, with uploader usernames resolved."""
        query: Dict[str, Any] = {'isPublic': True}
        if category and category != 'all':
            query['category'] = category
        return self._find(query, limit)

    @error_handler.wrap_errors("list uploader sounds")
    def get_sounds_by_uploader(self, user_id, include_private: bool = False) -> List[Dict[str, Any]]:
        uploader = error_handler.to_object_id(user_id)
        if uploader is None:
            return []
        query: Dict[str, Any] = {'uploader': uploader}
        if not include_private:
            query['isPublic'] = True
        return self._find(query)

    @error_handler.wrap_errors("get sound")
    def get_sound(self, sound_id) -> Optional[Dict[str, Any]]:
        object_id = error_handler.to_object_id(sound_id)
        if object_id is None:
            return None
        sound = self.collection.find_one({'_id': object_id})
        if not sound:
            return None
        return self._populate_uploaders([sound])[0]

    @error_handler.wrap_errors("create sound")
    def create_sound(self, sound_data: Dict[str, Any]) -> Dict[str, Any]:
        if not error_handler.validate_required_fields(sound_data, ['title', 'category', 'filePath', 'uploader']):
            raise ValueError("Sound is missing required fields")
        if sound_data['category'] not in SOUND_CATEGORIES:
            raise ValueError(f"Unknown sound category: {sound_data['category']}")

        document = {
            'title': sound_data['title'],
            'description': sound_data.get('description', ''),
            'category': sound_data['category'],
            'isPublic': bool(sound_data.get('isPublic', True)),
            'filePath': sound_data['filePath'],
            'uploader': error_handler.to_object_id(sound_data['uploader']),
            'createdAt': sound_data.get('createdAt') or datetime.now(timezone.utc),
        }
        result = self.collection.insert_one(document)
        document['_id'] = result.inserted_id
        self.logger.info(f"Sound created: {document['title']} ({result.inserted_id})")
        return document

    @error_handler.wrap_errors("delete sound")
    def delete_sound(self, sound_id) -> bool:
        object_id = error_handler.to_object_id(sound_id)
        if object_id is None:
            return False
        deleted = self.collection.delete_one({'_id': object_id}).deleted_count == 1
        if deleted:
            self.logger.info(f"Sound deleted: {object_id}")
        return deleted


def with_full_urls(sounds: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Copy each sound with a fullUrl field mirroring its stored filePath."""
    return [{**sound, 'fullUrl': sound.get('filePath')} for sound in sounds]
