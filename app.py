"""
Application Bootstrap - Mental Wellness Soundboard

Creates the Flask application, configures server-side sessions, registers
blueprints, and initializes the services needed for the web UI.
"""

from typing import Optional

from flask import Flask, render_template
from flask.sessions import SecureCookieSessionInterface
from flask_session import Session
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from auth import current_session_user, login_manager
from config.config import Config
from services.service_manager import EXTENSION_KEY, ServiceManager
from utils.logger import get_module_logger, setup_logger

# Import blueprints
from routes.auth import auth_bp
from routes.main import main_bp
from routes.sounds import sounds_bp
from routes.users import users_bp

logger = get_module_logger("Soundboard.App")


def create_app(config_class=Config, services: Optional[ServiceManager] = None):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Setup logging
    setup_logger("Soundboard", app.config.get('LOG_FILE'), app.config.get('LOG_LEVEL', 'INFO'),
                 enqueue=not app.config.get('TESTING', False))
    logger.info("Starting Mental Wellness Soundboard")

    # Services are built here and handed to the app, never module globals
    services = services or ServiceManager(app.config)
    app.extensions[EXTENSION_KEY] = services
    services.init()

    init_sessions(app, services)
    login_manager.init_app(app)

    # Register blueprints (first match wins, in this order)
    app.register_blueprint(auth_bp, url_prefix='/')
    app.register_blueprint(main_bp, url_prefix='/')
    app.register_blueprint(sounds_bp, url_prefix='/sounds')
    app.register_blueprint(users_bp, url_prefix='/users')

    # Error handlers
    register_error_handlers(app)

    logger.info("Soundboard Flask application initialized successfully")
    return app


def init_sessions(app, services: ServiceManager) -> bool:
    """Store sessions in MongoDB when a session backend is configured.

    Returns True when the MongoDB session store is active. An unreachable
    database leaves the app on signed cookie sessions.
    """
    if not app.config.get('SESSION_TYPE'):
        logger.debug("Using signed cookie sessions")
        return False

    connection = services.get_database_service().connection_manager
    try:
        connection.connect()
        app.config.setdefault('SESSION_MONGODB', connection.client)
        app.config.setdefault('SESSION_MONGODB_DB', connection.database_name)
        Session(app)
    except PyMongoError as e:
        logger.error(f"Session store unavailable, falling back to signed cookie sessions: {e}")
        app.session_interface = SecureCookieSessionInterface()
        return False

    logger.debug(f"Server-side sessions stored in '{app.config['SESSION_MONGODB_COLLECT']}'")
    return True


def close_app(app):
    """Release services attached by create_app."""
    services = app.extensions.pop(EXTENSION_KEY, None)
    if services is not None:
        services.close()


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('404.html', title='Page Not Found', user=current_session_user()), 404

    @app.errorhandler(HTTPException)
    def http_error(error):
        return render_template(
            'error.html',
            title=error.name,
            user=current_session_user(),
            message=error.description,
        ), error.code

    @app.errorhandler(Exception)
    def handle_exception(error):
        logger.opt(exception=error).error(f"Server Error: {error}")
        return render_template(
            'error.html',
            title='Server Error',
            user=current_session_user(),
            message='Something went wrong!',
        ), 500


if __name__ == '__main__':
    import atexit

    app = create_app()
    atexit.register(close_app, app)
    port = app.config['PORT']
    logger.info(f"Server running on port {port}")
    logger.info(f"Visit: http://localhost:{port}")
    app.run(host='0.0.0.0', port=port, debug=False)
