from typing import Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from utils.logger import get_module_logger

DEFAULT_DB_NAME = "mental_wellness"


class DatabaseConnection:
    """Handles MongoDB client lifecycle for the application."""

    def __init__(self, uri: str, timeout_ms: int = 5000, client_factory: Optional[Callable[..., MongoClient]] = None):
        self.uri = uri
        self.timeout_ms = timeout_ms
        self.client_factory = client_factory or MongoClient
        self.client: Optional[MongoClient] = None
        self.logger = get_module_logger("DatabaseService.Connection")

    def connect(self) -> Database:
        """Create the client (lazy, pooled) and return the application database."""
        if self.client is None:
            self.client = self.client_factory(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            self.logger.debug(f"MongoDB client created for database '{self.database_name}'")
        return self.client[self.database_name]

    @property
    def database_name(self) -> str:
        """Database name from the URI path, or the default when absent."""
        path = self.uri.split("://", 1)[-1]
        if "/" not in path:
            return DEFAULT_DB_NAME
        name = path.split("/", 1)[1].split("?", 1)[0]
        return name or DEFAULT_DB_NAME

    @property
    def db(self) -> Database:
        return self.connect()

    def test_connection(self) -> bool:
        """Ping the server and return success status."""
        try:
            self.connect()
            self.client.admin.command("ping")
            self.logger.info("MongoDB connection test successful")
            return True
        except PyMongoError as e:
            self.logger.error(f"MongoDB connection test failed: {e}")
            return False

    def close(self):
        """Close the client and release pooled sockets."""
        if self.client is not None:
            try:
                self.client.close()
            except PyMongoError as e:
                self.logger.warning(f"Error closing MongoDB client: {e}")
            finally:
                self.client = None
                self.logger.debug("MongoDB client closed")
