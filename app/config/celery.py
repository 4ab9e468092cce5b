"""
Celery configuration for the notification engine.

Notification delivery runs on Celery workers:
- notifications.tasks.deliver_notification stores the in-app record and
  fans out to push and mail
- Tasks are acknowledged late, so a worker crash redelivers them

This configuration uses Redis as both the message broker and result backend.
Tasks are auto-discovered from all installed Django apps.

Usage:
    # Worker
    celery -A config worker -l info

    # Enqueue (normally through notifications.events.notify)
    from notifications.tasks import deliver_notification
    deliver_notification.delay(recipient_id=user.id, notification_type="post_liked")

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Celery will look for a tasks.py module in each installed app
app.autodiscover_tasks()
