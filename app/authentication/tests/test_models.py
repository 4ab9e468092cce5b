"""
Tests for the User model.

Covers the parts of the user row the notification engine relies on:
- Display identity used as the actor of notifications
- The single push device registration
"""

import pytest
from django.db import IntegrityError

from authentication.models import User
from authentication.tests.factories import UserFactory


class TestUserModel:
    """Tests for User fields and string helpers."""

    def test_str_returns_email(self, user):
        assert str(user) == user.email

    def test_email_must_be_unique(self, db):
        UserFactory(email="dup@example.com")

        with pytest.raises(IntegrityError):
            UserFactory(email="dup@example.com")

    def test_full_name_falls_back_to_email(self, db):
        user = UserFactory(name="")

        assert user.get_full_name() == user.email

    def test_short_name_uses_first_word_of_name(self, db):
        user = UserFactory(name="Ada Lovelace")

        assert user.get_short_name() == "Ada"

    def test_short_name_without_name_uses_email_local_part(self, db):
        user = UserFactory(name="", email="grace@example.com")

        assert user.get_short_name() == "grace"


class TestPushDevice:
    """Tests for the push device registration fields."""

    def test_has_push_device_false_without_token(self, user):
        assert user.has_push_device is False

    def test_has_push_device_true_with_token(self, user_with_device):
        assert user_with_device.has_push_device is True

    def test_empty_token_is_not_a_device(self, db):
        user = UserFactory(fcm_token="")

        assert user.has_push_device is False

    def test_device_fields_round_trip(self, user_with_device):
        user = User.objects.get(pk=user_with_device.pk)

        assert user.device_type == User.DeviceType.ANDROID
        assert user.device_info == {"app_version": "2.1.0", "os_version": "14"}


class TestActorPayload:
    """Tests for User.actor_payload()."""

    def test_contains_display_identity(self, db):
        user = UserFactory(
            name="Ada Lovelace",
            avatar="https://cdn.example.com/ada.png",
            avatar_color="#FF5722",
            role=User.Role.PROFESSIONAL,
            is_verified=True,
        )

        assert user.actor_payload() == {
            "id": user.id,
            "name": "Ada Lovelace",
            "avatar": "https://cdn.example.com/ada.png",
            "avatar_color": "#FF5722",
            "role": "professional",
            "is_verified": True,
        }

    def test_blank_optional_fields_become_none(self, db):
        user = UserFactory(avatar="", avatar_color="", role="")

        payload = user.actor_payload()

        assert payload["avatar"] is None
        assert payload["avatar_color"] is None
        assert payload["role"] is None
        assert payload["is_verified"] is False
