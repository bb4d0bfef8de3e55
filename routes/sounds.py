"""
Module Name: sounds.py
Description:
    Sound browsing by mood, sound detail pages, uploads, and deletion.

Location:
    /routes/sounds.py
"""

from flask import Blueprint, abort, current_app, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from auth import consume_messages, current_session_user, push_message
from services.database import SOUND_CATEGORIES
from services.database.sounds import with_full_urls
from services.service_manager import get_database_service, get_sound_feed, get_upload_storage
from utils.logger import get_module_logger
from utils.sound_icons import get_sound_icon

logger = get_module_logger("Routes.Sounds")

sounds_bp = Blueprint('sounds', __name__)

MOODS = ('all',) + SOUND_CATEGORIES


def _render_listing(mood: str):
    result = get_sound_feed().load_mood(mood)
    messages = consume_messages()
    if not result.ok:
        messages = {'error': result.error}

    return render_template(
        'sounds/list.html',
        user=current_session_user(),
        title=f"{mood.capitalize()} Sounds - {current_app.config['APP_TITLE']}",
        sounds=result.sounds,
        currentMood=mood,
        moods=MOODS,
        messages=messages,
        getSoundIcon=get_sound_icon,
    )


@sounds_bp.route('/')
def list_sounds():
    """Public sounds, optionally filtered with ?mood=<category>."""
    mood = request.args.get('mood', 'all').strip().lower()
    if mood not in MOODS:
        mood = 'all'
    return _render_listing(mood)


@sounds_bp.route('/mood/<category>')
def list_mood(category):
    """Public sounds for a single mood."""
    if category not in MOODS:
        abort(404)
    return _render_listing(category)


def _owns(sound) -> bool:
    uploader = sound.get('uploader')
    return (
        current_user.is_authenticated
        and uploader is not None
        and str(uploader['_id']) == current_user.id
    )


@sounds_bp.route('/<sound_id>')
def sound_detail(sound_id):
    """Single sound page. Private sounds are only shown to their uploader."""
    sound = get_database_service().get_sound(sound_id)
    if sound is None:
        abort(404)
    is_owner = _owns(sound)
    if not sound.get('isPublic') and not is_owner:
        abort(404)

    return render_template(
        'sounds/detail.html',
        user=current_session_user(),
        title=f"{sound['title']} - {current_app.config['APP_TITLE']}",
        sound=with_full_urls([sound])[0],
        isOwner=is_owner,
        messages=consume_messages(),
        getSoundIcon=get_sound_icon,
    )


@sounds_bp.route('/upload', methods=['GET', 'POST'])
@login_required
def upload():
    """Upload form and handler."""
    form = {
        'title': request.form.get('title', '').strip(),
        'description': request.form.get('description', '').strip(),
        'category': request.form.get('category', 'calm'),
        'isPublic': request.form.get('isPublic', 'on' if request.method == 'GET' else '') in ('on', 'true', '1'),
    }

    def render_form(error=None, status=200):
        return render_template(
            'sounds/upload.html',
            user=current_session_user(),
            title=f"Upload a Sound - {current_app.config['APP_TITLE']}",
            categories=SOUND_CATEGORIES,
            form=form,
            error=error,
            messages=consume_messages(),
        ), status

    if request.method == 'GET':
        return render_form()

    if not form['title']:
        return render_form('Please give your sound a title', 400)
    if form['category'] not in SOUND_CATEGORIES:
        return render_form('Please choose a valid mood category', 400)

    storage = get_upload_storage()
    stored, file_url = storage.save(request.files.get('sound'))
    if not stored:
        logger.warning(f"Upload rejected for {current_user.username}: {file_url}")
        return render_form(file_url, 400)

    try:
        sound = get_database_service().create_sound({**form, 'filePath': file_url, 'uploader': current_user.id})
    except Exception:
        storage.remove(file_url)
        raise

    logger.success(f"Sound uploaded by {current_user.username}: {sound['title']}")
    push_message('success', 'Sound uploaded successfully!')
    return redirect(url_for('sounds.sound_detail', sound_id=str(sound['_id'])))


@sounds_bp.route('/<sound_id>/delete', methods=['POST'])
@login_required
def delete_sound(sound_id):
    """Delete a sound owned by the current user."""
    db_service = get_database_service()
    sound = db_service.get_sound(sound_id)
    if sound is None:
        abort(404)
    if not _owns(sound):
        logger.warning(f"User {current_user.username} tried to delete sound {sound_id} they do not own")
        abort(403)

    db_service.delete_sound(sound_id)
    get_upload_storage().remove(sound.get('filePath'))
    push_message('success', 'Sound deleted')
    return redirect(url_for('users.profile'))
