"""
Notification preference resolution.

Resolves, for a user and a notification category, which delivery channels
are allowed. Resolution is fail-open: a user without a preference row, or
a category missing from the row's mapping, gets every channel.

Design Decisions:
    - TTL-based caching (5 min by default) for preference lookups
    - PreferenceService.update_preferences invalidates the user's entry
    - The database step of dispatch never consults preferences

Usage:
    from notifications.preferences import PreferenceResolver

    prefs = PreferenceResolver.resolve(user)
    if prefs.is_channel_enabled("push", "social"):
        # Send push notification
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.cache import cache

if TYPE_CHECKING:
    from authentication.models import User

    from notifications.models import UserNotificationPreference

logger = logging.getLogger(__name__)


PREFERENCE_CACHE_TTL = 300  # 5 minutes
PREFERENCE_CACHE_PREFIX = "notif_pref"


@dataclass(frozen=True)
class ResolvedPreferences:
    """
    Effective preferences for one user.

    Attributes:
        push_enabled: Push channel switch
        email_enabled: Mail channel switch
        in_app_enabled: In-app list switch
        categories: Category switches as stored (missing = enabled)
        exists: False when the user never saved preferences
    """

    push_enabled: bool = True
    email_enabled: bool = True
    in_app_enabled: bool = True
    categories: dict[str, bool] = field(default_factory=dict)
    exists: bool = False

    def is_category_enabled(self, category: str) -> bool:
        return bool(self.categories.get(category, True))

    def is_channel_enabled(self, channel: str, category: str) -> bool:
        """Channel switch AND category switch."""
        if not self.is_category_enabled(category):
            return False
        return {
            "push": self.push_enabled,
            "mail": self.email_enabled,
            "email": self.email_enabled,
            "database": self.in_app_enabled,
        }.get(channel, True)

    @classmethod
    def from_model(cls, preference: UserNotificationPreference) -> ResolvedPreferences:
        return cls(
            push_enabled=preference.push_notifications,
            email_enabled=preference.email_notifications,
            in_app_enabled=preference.in_app_notifications,
            categories=dict(preference.notification_types or {}),
            exists=True,
        )


ALL_ENABLED = ResolvedPreferences()


class PreferenceResolver:
    """
    Cached, fail-open preference lookup.

    A cache or database error never blocks delivery: the resolver logs and
    answers with ALL_ENABLED.
    """

    @staticmethod
    def _get_cache_key(user_id) -> str:
        return f"{PREFERENCE_CACHE_PREFIX}:{user_id}"

    @staticmethod
    def _ttl() -> int:
        return getattr(settings, "NOTIFICATION_PREFERENCE_CACHE_TTL", PREFERENCE_CACHE_TTL)

    @classmethod
    def resolve(cls, user: User, use_cache: bool = True) -> ResolvedPreferences:
        """
        Resolve preferences for a user.

        Args:
            user: The user to resolve preferences for
            use_cache: Whether to use cache (default True)

        Returns:
            ResolvedPreferences (ALL_ENABLED when no row exists)
        """
        cache_key = cls._get_cache_key(user.pk)
        if use_cache:
            cached = cache.get(cache_key)
            if cached is not None:
                return cached

        resolved = cls._resolve_from_db(user)

        if use_cache:
            cache.set(cache_key, resolved, timeout=cls._ttl())
        return resolved

    @classmethod
    def _resolve_from_db(cls, user: User) -> ResolvedPreferences:
        from django.db import DatabaseError

        from notifications.models import UserNotificationPreference

        try:
            preference = UserNotificationPreference.objects.get(user=user)
        except UserNotificationPreference.DoesNotExist:
            return ALL_ENABLED
        except DatabaseError as e:
            logger.warning(
                f"Preference lookup failed for user {user.pk}, defaulting to enabled: {e}"
            )
            return ALL_ENABLED
        return ResolvedPreferences.from_model(preference)

    @classmethod
    def invalidate_cache(cls, user_id) -> None:
        cache.delete(cls._get_cache_key(user_id))
