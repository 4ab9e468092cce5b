"""
Test configuration and fixtures for notification tests.

This module provides:
- User fixtures (recipient, other user, actor, recipient with a device)
- In-memory push and mail transports recording every call
- A notification service graph built on those transports, patched in
  wherever production code calls get_services()
- API client helpers for authenticated requests

Usage:
    def test_example(device_user, services, fake_push):
        services.mobile.send_to_user(device_user, "post_liked", {})
        assert fake_push.sent[0].token == device_user.fcm_token
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import UserFactory
from notifications.exceptions import PushDeliveryError
from notifications.wiring import build_services, get_services


# =============================================================================
# Fakes
# =============================================================================


class FakePushClient:
    """
    In-memory PushClient.

    Attributes:
        sent: Envelopes accepted by send()
        batches: Envelope lists passed to send_each()
        subscriptions / unsubscriptions: (token, topic) pairs
        fail: Every call raises PushDeliveryError
        reject_tokens: Tokens the provider refuses
        fail_topics: Topics whose subscription fails
    """

    def __init__(self):
        self.sent = []
        self.batches = []
        self.subscriptions = []
        self.unsubscriptions = []
        self.fail = False
        self.reject_tokens = set()
        self.fail_topics = set()

    def send(self, envelopes):
        if self.fail or envelopes.token in self.reject_tokens:
            raise PushDeliveryError("Requested entity was not found.")
        self.sent.append(envelopes)
        return f"projects/test/messages/{len(self.sent)}"

    def send_each(self, envelopes):
        if self.fail:
            raise PushDeliveryError("Service unavailable")
        self.batches.append(envelopes)
        return [item.token not in self.reject_tokens for item in envelopes]

    def subscribe(self, token, topic):
        if self.fail or topic in self.fail_topics:
            raise PushDeliveryError(f"Topic operation failed: {topic}")
        self.subscriptions.append((token, topic))

    def unsubscribe(self, token, topic):
        if self.fail:
            raise PushDeliveryError(f"Topic operation failed: {topic}")
        self.unsubscriptions.append((token, topic))


class FakeMailer:
    """In-memory EmailSender; returns `result` for every send."""

    def __init__(self):
        self.sent = []
        self.result = True

    def send_raw(self, to, subject, body_text, body_html=None, **kwargs):
        self.sent.append({"to": to, "subject": subject, "body_text": body_text})
        return self.result


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_notification_state():
    """Fresh preference cache and service graph for every test."""
    cache.clear()
    get_services.cache_clear()
    yield
    cache.clear()
    get_services.cache_clear()


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic verified user to receive notifications."""
    return UserFactory(email_verified=True)


@pytest.fixture
def other_user(db):
    """Create another verified user for multi-user tests."""
    return UserFactory(email_verified=True)


@pytest.fixture
def actor_user(db):
    """Create a user to act as notification actor (trigger)."""
    return UserFactory(
        email_verified=True,
        name="Ada Lovelace",
        avatar="https://cdn.example.com/ada.png",
        avatar_color="#FF5722",
        is_verified=True,
    )


@pytest.fixture
def device_user(db):
    """Create a verified user with a registered iOS device."""
    return UserFactory(
        email_verified=True,
        fcm_token="fcm-token-ios-0000000001",
        device_type=User.DeviceType.IOS,
        device_info={"app_version": "3.0.1", "os_version": "17.4"},
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def fake_push():
    return FakePushClient()


@pytest.fixture
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def services(fake_push, fake_mailer):
    """Service graph wired to the in-memory transports."""
    return build_services(push_client=fake_push, mailer=fake_mailer)


@pytest.fixture
def degraded_services(fake_mailer):
    """Service graph without a push client."""
    return build_services(push_client=None, mailer=fake_mailer)


@pytest.fixture
def use_services(mocker, services):
    """
    Make get_services() return the fake-backed graph everywhere.

    Patches the module-level imports as well as the wiring module itself.
    """
    for target in (
        "notifications.wiring.get_services",
        "notifications.views.get_services",
        "notifications.management.commands.send_test_notification.get_services",
    ):
        mocker.patch(target, return_value=services)
    return services


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/notifications/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def authenticated_client(authenticated_client_factory, user):
    """API client authenticated with JWT token for the default user fixture."""
    return authenticated_client_factory(user)
