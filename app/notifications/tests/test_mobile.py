"""
Tests for MobilePushService.
"""

from authentication.tests.factories import UserFactory
from notifications.mobile import MobilePushService, find_actor
from notifications.registry import NotificationType
from notifications.tests.factories import NotificationFactory


class TestBuildPayload:
    """Tests for MobilePushService.build_payload()."""

    def test_enriches_caller_payload(self, services, user):
        payload = services.mobile.build_payload(
            user, NotificationType.COMMENT_ADDED, {"post_id": 7, "comment_id": 3}
        )

        assert payload["post_id"] == 7
        assert payload["notification_type"] == "comment_added"
        assert payload["category"] == "social"
        assert payload["user_id"] == user.pk
        assert payload["icon"] == "message-circle"
        assert payload["sound"] == "social.wav"
        assert payload["priority"] == "normal"
        assert payload["navigation"]["screen"] == "PostDetail"
        assert payload["navigation"]["params"]["scroll_to_comments"] is True

    def test_badge_count_is_unread_plus_one(self, services, user):
        NotificationFactory.create_batch(2, recipient=user)
        NotificationFactory(recipient=user, read=True)

        payload = services.mobile.build_payload(user, NotificationType.POST_LIKED, {})

        assert payload["badge_count"] == 3

    def test_actor_card_from_payload_id(self, services, user, actor_user):
        payload = services.mobile.build_payload(
            user, NotificationType.POST_LIKED, {"liker_id": actor_user.pk}
        )

        assert payload["actor"] == actor_user.actor_payload()

    def test_unknown_actor(self, services, user):
        payload = services.mobile.build_payload(
            user, NotificationType.POST_LIKED, {"liker_id": 999999}
        )

        assert payload["actor"] is None

    def test_no_actor_key(self, services, user):
        payload = services.mobile.build_payload(user, NotificationType.SYSTEM_ANNOUNCEMENT, {})

        assert payload["actor"] is None

    def test_custom_actor_lookup(self, services, user):
        mobile = MobilePushService(services.gateway, actor_lookup=lambda pk: {"id": pk})

        payload = mobile.build_payload(user, NotificationType.MESSAGE_RECEIVED, {"sender_id": 5})

        assert payload["actor"] == {"id": 5}
        assert payload["priority"] == "high"


class TestFindActor:
    def test_invalid_ids(self, db):
        assert find_actor(None) is None
        assert find_actor("") is None
        assert find_actor("not-a-number") is None


class TestSendToUser:
    def test_without_token(self, services, user, fake_push):
        assert services.mobile.send_to_user(user, NotificationType.POST_LIKED, {}) is False
        assert fake_push.sent == []

    def test_sends_to_registered_device(self, services, device_user, fake_push):
        sent = services.mobile.send_to_user(
            device_user, NotificationType.MESSAGE_RECEIVED, {"title": "New Message"}
        )

        assert sent is True
        envelopes = fake_push.sent[0]
        assert envelopes.token == device_user.fcm_token
        assert envelopes.data["badge_count"] == "1"
        assert envelopes.data["sound"] == "message.wav"
        assert envelopes.apns["headers"]["apns-priority"] == "10"

    def test_provider_rejection(self, services, device_user, fake_push):
        fake_push.reject_tokens = {device_user.fcm_token}

        assert services.mobile.send_to_user(device_user, NotificationType.POST_LIKED, {}) is False

    def test_degraded_gateway(self, degraded_services, device_user):
        assert (
            degraded_services.mobile.send_to_user(device_user, NotificationType.POST_LIKED, {})
            is False
        )


class TestSendBatchToUsers:
    def test_counts_outcomes(self, db, services, fake_push):
        accepted = UserFactory(fcm_token="token-accepted")
        rejected = UserFactory(fcm_token="token-rejected")
        without_device = UserFactory()
        fake_push.reject_tokens = {"token-rejected"}

        results = services.mobile.send_batch_to_users(
            [accepted, rejected, without_device], NotificationType.EVENT_REMINDER, {"event_id": 1}
        )

        assert results == {"success": 1, "failed": 1, "no_token": 1}

    def test_unexpected_error_counts_as_failure(self, mocker, services, device_user):
        mocker.patch.object(services.mobile, "build_payload", side_effect=RuntimeError("boom"))

        results = services.mobile.send_batch_to_users([device_user], NotificationType.POST_LIKED)

        assert results == {"success": 0, "failed": 1, "no_token": 0}


class TestSendTest:
    def test_sends_canned_post_liked(self, services, device_user, fake_push):
        assert services.mobile.send_test(device_user) is True

        envelopes = fake_push.sent[0]
        assert envelopes.notification["title"] == "Test Notification"
        assert envelopes.data["notification_type"] == "post_liked"
        assert envelopes.data["post_id"] == "1"

    def test_without_device(self, services, user):
        assert services.mobile.send_test(user) is False
