"""
WSGI entry point for the notification service.

The notification API is plain request/response, so any WSGI server
(gunicorn, uWSGI) can host it. Push and mail delivery happen in Celery
workers, not in the web process.

Exposes the WSGI callable as a module-level variable named `application`.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
