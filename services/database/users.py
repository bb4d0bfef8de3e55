from datetime import datetime, timezone
from typing import Any, Dict, Optional, TYPE_CHECKING

from werkzeug.security import check_password_hash, generate_password_hash

from utils.logger import get_module_logger
from .error_handling import error_handler

if TYPE_CHECKING:
    from .connection import DatabaseConnection


class UserOperations:
    """Handles user account storage and credential checks"""

    collection_name = 'users'

    def __init__(self, connection_manager: 'DatabaseConnection'):
        self.connection_manager = connection_manager
        self.logger = get_module_logger("DatabaseService.Users")

    @property
    def collection(self):
        return self.connection_manager.db[self.collection_name]

    def ensure_indexes(self):
        self.collection.create_index('username', unique=True)
        self.collection.create_index('email', unique=True)

    @error_handler.wrap_errors("get user")
    def get_user(self, user_id) -> Optional[Dict[str, Any]]:
        object_id = error_handler.to_object_id(user_id)
        if object_id is None:
            return None
        return self.collection.find_one({'_id': object_id})

    @error_handler.wrap_errors("get user by username")
    def get_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({'username': username})

    @error_handler.wrap_errors("check user exists")
    def user_exists(self, username: str, email: str) -> bool:
        return self.collection.count_documents(
            {'$or': [{'username': username}, {'email': email.lower()}]}, limit=1
        ) > 0

    @error_handler.wrap_errors("create user")
    def create_user(self, username: str, email: str, password: str) -> Dict[str, Any]:
        document = {
            'username': username,
            'email': email.lower(),
            'passwordHash': generate_password_hash(password),
            'createdAt': datetime.now(timezone.utc),
        }
        result = self.collection.insert_one(document)
        document['_id'] = result.inserted_id
        self.logger.info(f"User created: {username}")
        return document

    @error_handler.wrap_errors("verify user")
    def verify_user(self, login: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the user matching username or email when the password checks out."""
        user = self.collection.find_one({'$or': [{'username': login}, {'email': login.lower()}]})
        if not user or not check_password_hash(user.get('passwordHash', ''), password):
            return None
        return user
