"""
Module Name: users.py
Description:
    Profile pages: the logged-in user's own uploads and public profiles.

Location:
    /routes/users.py
"""

from flask import Blueprint, abort, current_app, render_template
from flask_login import current_user, login_required

from auth import consume_messages, current_session_user
from services.database.sounds import with_full_urls
from services.service_manager import get_database_service
from utils.sound_icons import get_sound_icon

users_bp = Blueprint('users', __name__)


def _render_profile(profile_user, sounds, is_own_profile: bool):
    return render_template(
        'users/profile.html',
        user=current_session_user(),
        title=f"{profile_user['username']} - {current_app.config['APP_TITLE']}",
        profileUser=profile_user,
        sounds=with_full_urls(sounds),
        isOwnProfile=is_own_profile,
        messages=consume_messages(),
        getSoundIcon=get_sound_icon,
    )


@users_bp.route('/profile')
@login_required
def profile():
    """Current user's uploads, public and private."""
    db_service = get_database_service()
    record = db_service.get_user(current_user.id)
    if record is None:
        abort(404)
    sounds = db_service.get_sounds_by_uploader(record['_id'], include_private=True)
    return _render_profile(record, sounds, is_own_profile=True)


@users_bp.route('/<username>')
def public_profile(username):
    """Public uploads of any user."""
    db_service = get_database_service()
    record = db_service.get_user_by_username(username)
    if record is None:
        abort(404)
    is_own = current_user.is_authenticated and current_user.id == str(record['_id'])
    sounds = db_service.get_sounds_by_uploader(record['_id'], include_private=is_own)
    return _render_profile(record, sounds, is_own_profile=is_own)
