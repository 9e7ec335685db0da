"""WSGI entry point for the mock API service (e.g. ``gunicorn wsgi:app``)."""

import os

from mock_api import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
