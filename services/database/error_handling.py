from functools import wraps
from typing import Any, Callable, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, PyMongoError

from utils.logger import get_module_logger


class DatabaseError(Exception):
    """Raised when a database operation fails at the driver level."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class DuplicateRecordError(DatabaseError):
    """Raised when a unique index rejects an insert."""


class DatabaseErrorHandler:
    """Shared error translation for database operations"""

    def __init__(self):
        self.logger = get_module_logger("DatabaseService.ErrorHandling")

    def wrap_errors(self, operation: str):
        """Decorator converting driver errors into DatabaseError"""
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs) -> Any:
                try:
                    return func(*args, **kwargs)
                except DuplicateKeyError as e:
                    self.logger.warning(f"Duplicate entry detected during {operation}: {e}")
                    raise DuplicateRecordError(operation, "duplicate key") from e
                except PyMongoError as e:
                    self.logger.error(f"Database error during {operation}: {e}")
                    raise DatabaseError(operation, str(e)) from e
            return wrapper
        return decorator

    def to_object_id(self, value: Any) -> Optional[ObjectId]:
        """Parse an ObjectId, returning None for malformed input"""
        if isinstance(value, ObjectId):
            return value
        try:
            return ObjectId(str(value))
        except (InvalidId, TypeError):
            return None

    def validate_required_fields(self, data: dict, required_fields: list) -> bool:
        """Validate that required fields are present in data"""
        missing_fields = [field for field in required_fields if not data.get(field)]
        if missing_fields:
            self.logger.error(f"Missing required fields: {missing_fields}")
            return False
        return True

# Global instance for easy access
error_handler = DatabaseErrorHandler()
