"""WSGI entry point for the task service, e.g. ``gunicorn task_service.wsgi:app``."""

import os

from . import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
