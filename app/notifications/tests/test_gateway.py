"""
Tests for PushGateway.

The gateway never raises: every provider failure becomes False or a failed
token.
"""

import pytest

from notifications.gateway import PushGateway, redact_token
from notifications.registry import NotificationType


@pytest.fixture
def gateway(fake_push):
    return PushGateway(client=fake_push)


class TestSend:
    def test_success(self, gateway, fake_push):
        sent = gateway.send("token-aaaaaaaaaa", NotificationType.POST_LIKED, {"post_id": 1})

        assert sent is True
        assert fake_push.sent[0].token == "token-aaaaaaaaaa"
        assert fake_push.sent[0].data["post_id"] == "1"

    def test_legacy_type_is_resolved(self, gateway, fake_push):
        gateway.send("token-1", "PostLiked", {})

        assert fake_push.sent[0].data["notification_type"] == "post_liked"

    def test_empty_token(self, gateway, fake_push):
        assert gateway.send("", NotificationType.POST_LIKED, {}) is False
        assert fake_push.sent == []

    def test_provider_failure_returns_false(self, gateway, fake_push):
        fake_push.fail = True

        assert gateway.send("token-1", NotificationType.POST_LIKED, {}) is False

    def test_degraded_mode(self):
        gateway = PushGateway(client=None)

        assert gateway.is_available is False
        assert gateway.send("token-1", NotificationType.POST_LIKED, {}) is False


class TestSendBatch:
    def test_all_accepted(self, gateway, fake_push):
        result = gateway.send_batch(["a", "b"], NotificationType.EVENT_CREATED, {"event_id": 1})

        assert result.to_dict() == {"success": ["a", "b"], "failed": []}
        assert len(fake_push.batches[0]) == 2

    def test_partial_rejection(self, gateway, fake_push):
        fake_push.reject_tokens = {"b"}

        result = gateway.send_batch(["a", "b", "c"], NotificationType.EVENT_CREATED, {})

        assert result.success == ["a", "c"]
        assert result.failed == ["b"]

    def test_blank_tokens_are_ignored(self, gateway, fake_push):
        result = gateway.send_batch(["", None, "a"], NotificationType.EVENT_CREATED, {})

        assert result.success == ["a"]
        assert result.failed == []

    def test_no_tokens(self, gateway, fake_push):
        result = gateway.send_batch([], NotificationType.EVENT_CREATED, {})

        assert result.to_dict() == {"success": [], "failed": []}
        assert fake_push.batches == []

    def test_provider_outage_fails_every_token(self, gateway, fake_push):
        fake_push.fail = True

        result = gateway.send_batch(["a", "b"], NotificationType.EVENT_CREATED, {})

        assert result.failed == ["a", "b"]

    def test_degraded_mode(self):
        result = PushGateway(client=None).send_batch(["a"], NotificationType.EVENT_CREATED, {})

        assert result.failed == ["a"]


class TestTopics:
    def test_subscribe(self, gateway, fake_push):
        assert gateway.subscribe_to_topic("tok", "all_users") is True
        assert fake_push.subscriptions == [("tok", "all_users")]

    def test_unsubscribe(self, gateway, fake_push):
        assert gateway.unsubscribe_from_topic("tok", "all_users") is True
        assert fake_push.unsubscriptions == [("tok", "all_users")]

    def test_failure_returns_false(self, gateway, fake_push):
        fake_push.fail_topics = {"pref_jobs"}

        assert gateway.subscribe_to_topic("tok", "pref_jobs") is False

    def test_degraded_mode(self):
        assert PushGateway(client=None).subscribe_to_topic("tok", "all_users") is False


class TestRedactToken:
    def test_keeps_first_ten_characters(self):
        assert redact_token("abcdefghijklmnopqrstuvwxyz") == "abcdefghij..."

    def test_missing_token(self):
        assert redact_token(None) == "<none>"
