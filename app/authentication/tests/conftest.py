"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user):
        assert user.has_push_device is False
"""

import pytest

from authentication.models import User
from authentication.tests.factories import UserFactory


@pytest.fixture
def user(db):
    """Create a basic verified user."""
    return UserFactory(email_verified=True)


@pytest.fixture
def user_with_device(db):
    """Create a verified user with a registered Android device."""
    return UserFactory(
        email_verified=True,
        fcm_token="fcm-token-android-0001",
        device_type=User.DeviceType.ANDROID,
        device_info={"app_version": "2.1.0", "os_version": "14"},
    )


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )
