"""
Tests for preference resolution and caching.
"""

from django.db import DatabaseError

from notifications.models import UserNotificationPreference
from notifications.preferences import ALL_ENABLED, PreferenceResolver, ResolvedPreferences
from notifications.tests.factories import UserNotificationPreferenceFactory


class TestResolvedPreferences:
    def test_defaults_enable_everything(self):
        prefs = ResolvedPreferences()

        assert prefs.is_channel_enabled("push", "social") is True
        assert prefs.is_channel_enabled("mail", "jobs") is True
        assert prefs.is_channel_enabled("database", "events") is True

    def test_missing_category_is_enabled(self):
        prefs = ResolvedPreferences(categories={"jobs": False})

        assert prefs.is_category_enabled("social") is True
        assert prefs.is_category_enabled("jobs") is False

    def test_disabled_category_blocks_every_channel(self):
        prefs = ResolvedPreferences(categories={"jobs": False})

        assert prefs.is_channel_enabled("push", "jobs") is False
        assert prefs.is_channel_enabled("mail", "jobs") is False

    def test_channel_switches(self):
        prefs = ResolvedPreferences(push_enabled=False, email_enabled=False)

        assert prefs.is_channel_enabled("push", "social") is False
        assert prefs.is_channel_enabled("email", "social") is False
        assert prefs.is_channel_enabled("database", "social") is True


class TestPreferenceResolver:
    """Tests for PreferenceResolver.resolve()."""

    def test_no_row_resolves_to_all_enabled(self, user):
        assert PreferenceResolver.resolve(user) == ALL_ENABLED

    def test_row_is_resolved(self, user):
        UserNotificationPreferenceFactory(
            user=user, push_notifications=False, notification_types={"social": False}
        )

        prefs = PreferenceResolver.resolve(user)

        assert prefs.exists is True
        assert prefs.push_enabled is False
        assert prefs.is_category_enabled("social") is False

    def test_result_is_cached(self, user, django_assert_num_queries):
        PreferenceResolver.resolve(user)

        with django_assert_num_queries(0):
            PreferenceResolver.resolve(user)

    def test_bypass_cache(self, user, django_assert_num_queries):
        PreferenceResolver.resolve(user)

        with django_assert_num_queries(1):
            PreferenceResolver.resolve(user, use_cache=False)

    def test_invalidate_cache(self, user):
        PreferenceResolver.resolve(user)
        UserNotificationPreference.objects.bulk_create(
            [UserNotificationPreference(user=user, push_notifications=False)]
        )

        assert PreferenceResolver.resolve(user).push_enabled is True

        PreferenceResolver.invalidate_cache(user.pk)

        assert PreferenceResolver.resolve(user).push_enabled is False

    def test_database_error_fails_open(self, mocker, user):
        mocker.patch.object(
            UserNotificationPreference.objects, "get", side_effect=DatabaseError("down")
        )

        assert PreferenceResolver.resolve(user, use_cache=False) == ALL_ENABLED
