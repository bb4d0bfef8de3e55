"""
Database Service Package

Exposes the primary `DatabaseService` class and its error types for
convenience imports.
"""

from .database_service import DatabaseService
from .error_handling import DatabaseError, DuplicateRecordError
from .sounds import SOUND_CATEGORIES


__all__ = ['DatabaseService', 'DatabaseError', 'DuplicateRecordError', 'SOUND_CATEGORIES']
