"""
WSGI Entry Point - Mental Wellness Soundboard

Provides the application factory output for production servers such as
Gunicorn or uWSGI.
"""

import atexit

from app import close_app, create_app


app = create_app()
atexit.register(close_app, app)

# Example (Gunicorn):
#   gunicorn -w 2 -b 0.0.0.0:3000 wsgi:app
