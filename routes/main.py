"""
Module Name: main.py
Description:
    Home page listing the newest public sounds, plus the health check.
Location:
    /routes/main.py

"""

from flask import Blueprint, current_app, jsonify, render_template

from auth import consume_messages, current_session_user, peek_messages
from services.service_manager import get_database_service, get_sound_feed
from utils.logger import get_module_logger
from utils.sound_icons import get_sound_icon

main_bp = Blueprint('main', __name__)
logger = get_module_logger("Routes.Main")


@main_bp.route('/')
def index():
    """Home page: up to 12 public sounds, newest first."""
    result = get_sound_feed().load_home()

    if result.ok:
        response = render_template(
            'index.html',
            user=current_session_user(),
            title=current_app.config['APP_TITLE'],
            sounds=result.sounds,
            currentMood='all',
            messages=peek_messages(),
            getSoundIcon=get_sound_icon,
        )
    else:
        response = render_template(
            'index.html',
            user=current_session_user(),
            title=current_app.config['APP_TITLE'],
            sounds=[],
            currentMood='all',
            messages={'error': result.error},
            getSoundIcon=get_sound_icon,
        )

    # Messages are one-shot on both paths
    consume_messages()
    return response


@main_bp.route('/health')
def health_check():
    """Health check endpoint."""
    database_ok = get_database_service().test_connection()
    payload = {
        'status': 'healthy' if database_ok else 'degraded',
        'service': current_app.config['APP_TITLE'],
        'database': 'connected' if database_ok else 'unavailable',
    }
    return jsonify(payload), 200 if database_ok else 503
