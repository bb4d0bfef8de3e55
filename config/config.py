import os
import tempfile
from datetime import timedelta

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


class Config:
    # Basic Flask configuration
    SECRET_KEY = os.environ.get('SESSION_SECRET') or 'mental-wellness-secret'
    APP_TITLE = 'Mental Wellness Soundboard'

    # Database configuration
    MONGODB_URI = os.environ.get('MONGODB_URI') or 'mongodb://localhost:27017/mental_wellness'
    MONGODB_TIMEOUT_MS = int(os.environ.get('MONGODB_TIMEOUT_MS') or 5000)

    # Server settings
    PORT = int(os.environ.get('PORT') or 3000)

    # Logging configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'soundboard_web.log'

    # Session configuration (server-side, stored next to the app data)
    SESSION_TYPE = 'mongodb'
    SESSION_MONGODB_COLLECT = 'sessions'
    SESSION_PERMANENT = True
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    # Upload settings
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'static', 'uploads')
    UPLOAD_URL_PREFIX = '/static/uploads'
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file upload
    ALLOWED_AUDIO_EXTENSIONS = {'mp3', 'wav', 'ogg', 'm4a', 'aac', 'flac'}

    # Listing sizes
    HOME_SOUND_LIMIT = 12
    MOOD_SOUND_LIMIT = 50


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret'
    MONGODB_URI = 'mongodb://localhost:27017/mental_wellness_test'

    # Signed cookie sessions; no session store needed
    SESSION_TYPE = None

    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), 'soundboard_test_uploads')
    LOG_FILE = None
