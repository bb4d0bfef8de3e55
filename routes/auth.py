"""
Module Name: auth.py
Description:
    Authentication routes for registration, login, and logout.

Location:
    /routes/auth.py
"""

from flask import Blueprint, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from auth import (
    consume_messages,
    current_session_user,
    forget_user,
    push_message,
    remember_user,
    safe_next_path,
    validate_registration,
)
from services.database import DuplicateRecordError
from services.service_manager import get_database_service
from utils.logger import get_module_logger

logger = get_module_logger("Routes.Auth")

auth_bp = Blueprint('auth', __name__)


def _render_form(template: str, title: str, error=None, status: int = 200, **fields):
    return render_template(
        template,
        title=title,
        user=current_session_user(),
        messages=consume_messages(),
        error=error,
        **fields,
    ), status


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Registration page"""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password', '')

        valid, error = validate_registration(username, email, password, confirm_password)
        if not valid:
            logger.warning(f"Registration validation failed: {error}")
            return _render_form('register.html', 'Register', error=error, status=400, username=username, email=email)

        db_service = get_database_service()
        if db_service.user_exists(username, email):
            logger.warning(f"Registration rejected, user exists: {username}")
            return _render_form('register.html', 'Register', error='Username or email already registered',
                                status=400, username=username, email=email)

        try:
            record = db_service.create_user(username, email, password)
        except DuplicateRecordError:
            return _render_form('register.html', 'Register', error='Username or email already registered',
                                status=400, username=username, email=email)

        remember_user(record)
        logger.success(f"User registered: {username}")
        push_message('success', f'Welcome, {username}!')
        return redirect(url_for('main.index'))

    return _render_form('register.html', 'Register')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page"""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    if request.method == 'POST':
        login_name = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if not login_name or not password:
            logger.warning("Login attempt with missing credentials")
            return _render_form('login.html', 'Login', error='Please provide both username and password',
                                status=400, username=login_name)

        record = get_database_service().verify_user(login_name, password)
        if record is None:
            logger.warning(f"Failed login attempt for user: {login_name}")
            return _render_form('login.html', 'Login', error='Invalid username or password',
                                status=401, username=login_name)

        remember_user(record)
        logger.info(f"User logged in: {record['username']}")
        push_message('success', f"Welcome back, {record['username']}!")

        next_page = safe_next_path(request.args.get('next'))
        return redirect(next_page or url_for('main.index'))

    return _render_form('login.html', 'Login')


@auth_bp.route('/logout')
@login_required
def logout():
    """Logout the current user"""
    username = current_user.username
    forget_user()
    push_message('success', 'You have been logged out')
    logger.info(f"User logged out: {username}")
    return redirect(url_for('main.index'))
