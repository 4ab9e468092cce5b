"""
Django signals for the notifications app.

Keeps the preference cache honest when preference rows change outside
PreferenceService (admin edits, fixtures, user deletion).
"""

from __future__ import annotations

import logging

from django.db.models.signals import post_delete, post_save

from notifications.preferences import PreferenceResolver

logger = logging.getLogger(__name__)


def connect_signals():
    """
    Connect all signal handlers.

    Called from NotificationsConfig.ready() after all models are loaded.
    """
    from notifications.models import UserNotificationPreference

    post_save.connect(
        invalidate_preference_cache,
        sender=UserNotificationPreference,
        dispatch_uid="notification_preference_saved",
    )
    post_delete.connect(
        invalidate_preference_cache,
        sender=UserNotificationPreference,
        dispatch_uid="notification_preference_deleted",
    )

    logger.debug("Notification signals connected")


def invalidate_preference_cache(sender, instance, **kwargs) -> None:
    """Drop the cached resolution for the preference owner."""
    PreferenceResolver.invalidate_cache(instance.user_id)
