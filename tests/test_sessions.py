"""
Tests for session storage: the MongoDB store used in production and the
signed cookie fallback when the database is unreachable at startup.
"""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from flask.sessions import SecureCookieSessionInterface
from flask_session.mongodb import MongoDBSessionInterface
from flask_session.mongodb import mongodb as flask_session_mongodb
from loguru import logger

from app import close_app, create_app
from utils.logger import setup_logger

TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def startup_logs():
    """Loguru records emitted while the app is being built."""
    setup_logger("Soundboard", None, "DEBUG", enqueue=False)
    captured = []
    sink_id = logger.add(captured.append, level="DEBUG", format="{message}")
    yield captured
    logger.remove(sink_id)


@pytest.fixture
def mongo_session_app(config_class, services, monkeypatch):
    # Flask-Session only accepts pymongo clients; hand it the in-memory one
    monkeypatch.setattr(flask_session_mongodb, "MongoClient", mongomock.MongoClient)
    session_config = type("MongoSessionConfig", (config_class,), {"SESSION_TYPE": "mongodb"})
    application = create_app(session_config, services=services)
    yield application
    close_app(application)


@pytest.fixture
def unreachable_app(config_class, startup_logs):
    unreachable_config = type("UnreachableConfig", (config_class,), {
        "SESSION_TYPE": "mongodb",
        "MONGODB_URI": "mongodb://127.0.0.1:1/mental_wellness_test",
        "MONGODB_TIMEOUT_MS": 100,
    })
    application = create_app(unreachable_config)
    yield application
    close_app(application)


class TestMongoSessions:
    def test_sessions_use_mongodb_store(self, mongo_session_app):
        assert isinstance(mongo_session_app.session_interface, MongoDBSessionInterface)
        assert mongo_session_app.config["SESSION_MONGODB_DB"] == "mental_wellness_test"

    def test_session_lifetime_is_24_hours(self, mongo_session_app):
        assert mongo_session_app.permanent_session_lifetime == timedelta(hours=24)

    def test_login_session_is_stored_server_side(self, mongo_session_app, db, make_user):
        make_user("calm_listener")
        client = mongo_session_app.test_client()

        response = client.post("/login", data={"username": "calm_listener", "password": TEST_PASSWORD})

        assert response.status_code == 302
        stored = list(db["sessions"].find())
        assert len(stored) == 1
        remaining = stored[0]["expiration"] - datetime.now(timezone.utc).replace(tzinfo=None)
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    def test_stored_session_carries_user_and_messages(self, mongo_session_app, make_user):
        make_user("calm_listener")
        client = mongo_session_app.test_client()
        client.post("/login", data={"username": "calm_listener", "password": TEST_PASSWORD})

        html = client.get("/").get_data(as_text=True)

        assert "Welcome back, calm_listener!" in html
        assert "nav-user" in html


class TestUnreachableDatabase:
    def test_app_starts_with_cookie_sessions(self, unreachable_app, startup_logs):
        assert isinstance(unreachable_app.session_interface, SecureCookieSessionInterface)
        assert any("MongoDB connection error" in message for message in startup_logs)
        assert any("falling back to signed cookie sessions" in message for message in startup_logs)

    def test_home_page_degrades_to_empty_listing(self, unreachable_app):
        response = unreachable_app.test_client().get("/")

        assert response.status_code == 200
        assert "Failed to load sounds" in response.get_data(as_text=True)
