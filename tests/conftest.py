"""
Pytest fixtures and configuration for the test suite.

- mongomock stands in for the MongoDB server (same pymongo API, in memory)
- Each test gets a fresh app, database and upload folder
- Loguru output is captured into a list for log assertions
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import mongomock
import pytest
from loguru import logger

# Add project root to path so tests can import the app modules
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from app import close_app, create_app  # noqa: E402
from config.config import TestingConfig  # noqa: E402
from services.service_manager import ServiceManager  # noqa: E402

BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
TEST_PASSWORD = "s3cret-pass"


def config_dict(config_class) -> dict:
    return {key: getattr(config_class, key) for key in dir(config_class) if key.isupper()}


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def config_class(tmp_path):
    return type("PerTestConfig", (TestingConfig,), {"UPLOAD_FOLDER": str(tmp_path / "uploads")})


@pytest.fixture
def services(mongo_client, config_class):
    manager = ServiceManager(config_dict(config_class), client_factory=lambda *args, **kwargs: mongo_client)
    yield manager
    manager.close()


@pytest.fixture
def db_service(services):
    return services.get_database_service()


@pytest.fixture
def db(mongo_client):
    return mongo_client["mental_wellness_test"]


@pytest.fixture
def app(config_class, services):
    application = create_app(config_class, services=services)
    yield application
    close_app(application)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def log_messages(app):
    """Everything logged through loguru while the test runs."""
    captured = []
    sink_id = logger.add(captured.append, level="DEBUG", format="{message}")
    yield captured
    logger.remove(sink_id)


@pytest.fixture
def make_user(db_service):
    def _make_user(username="calm_listener", email=None, password=TEST_PASSWORD):
        return db_service.create_user(username, email or f"{username}@example.com", password)
    return _make_user


@pytest.fixture
def make_sound(db):
    """Insert a sound document directly; minutes offsets BASE_TIME for ordering."""
    def _make_sound(title, uploader=None, category="calm", is_public=True, minutes=0, file_path=None):
        document = {
            "title": title,
            "description": "",
            "category": category,
            "isPublic": is_public,
            "filePath": file_path or f"/static/uploads/{title.lower().replace(' ', '_')}.mp3",
            "uploader": uploader["_id"] if uploader else None,
            "createdAt": BASE_TIME + timedelta(minutes=minutes),
        }
        document["_id"] = db["sounds"].insert_one(document).inserted_id
        return document
    return _make_sound


@pytest.fixture
def login(client):
    def _login(username="calm_listener", password=TEST_PASSWORD):
        return client.post("/login", data={"username": username, "password": password})
    return _login
