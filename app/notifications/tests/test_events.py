"""
Tests for notify() and notify_many().

Tasks are enqueued only when the surrounding transaction commits.
"""

import uuid
from datetime import datetime, timezone as dt_timezone

import pytest
from django.db import transaction
from kombu.exceptions import OperationalError

from notifications.events import notify, notify_many


@pytest.fixture
def delay(mocker):
    return mocker.patch("notifications.tasks.deliver_notification.delay")


class TestNotify:
    def test_enqueues_after_commit(self, user, delay, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            notify(user, "post_liked", {"post_id": 1})

        delay.assert_not_called()
        assert len(callbacks) == 1

        callbacks[0]()

        delay.assert_called_once_with(
            recipient_id=user.pk,
            notification_type="post_liked",
            data={"post_id": 1},
            channels=["database", "push"],
        )

    def test_legacy_type_and_channel_alias(self, user, delay, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            notify(user, "App\\Notifications\\CommentAdded", {}, channels=["email"])

        kwargs = delay.call_args.kwargs
        assert kwargs["notification_type"] == "comment_added"
        assert kwargs["channels"] == ["mail"]

    def test_payload_is_json_safe(self, user, delay, django_capture_on_commit_callbacks):
        event_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
        starts = datetime(2026, 6, 1, 18, 0, tzinfo=dt_timezone.utc)

        with django_capture_on_commit_callbacks(execute=True):
            notify(user, "event_reminder", {"event_id": event_id, "starts_at": starts})

        data = delay.call_args.kwargs["data"]
        assert data["event_id"] == "12345678-1234-5678-1234-567812345678"
        assert data["starts_at"] == "2026-06-01T18:00:00Z"

    def test_nothing_enqueued_on_rollback(self, user, delay, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            with pytest.raises(RuntimeError):
                with transaction.atomic():
                    notify(user, "post_liked", {})
                    raise RuntimeError("rolled back")

        assert callbacks == []
        delay.assert_not_called()


class TestNotifyMany:
    def test_one_task_per_recipient(
        self, user, other_user, delay, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            count = notify_many([user, other_user], "event_created", {"event_id": 3})

        assert count == 2
        recipients = [call.kwargs["recipient_id"] for call in delay.call_args_list]
        assert recipients == [user.pk, other_user.pk]


class TestEnqueueFailures:
    def test_broker_outage_is_logged_not_raised(
        self, mocker, user, delay, django_capture_on_commit_callbacks
    ):
        delay.side_effect = OperationalError("broker down")
        logger = mocker.patch("notifications.events.logger")

        with django_capture_on_commit_callbacks(execute=True):
            assert notify(user, "post_liked", {"post_id": 1}) is True

        delay.assert_called_once()
        message = logger.error.call_args.args[0]
        assert "post_liked" in message
        assert str(user.pk) in message
        assert "broker down" in message

    def test_unserializable_payload_is_dropped(
        self, mocker, user, delay, django_capture_on_commit_callbacks
    ):
        logger = mocker.patch("notifications.events.logger")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            assert notify(user, "event_registered", {"event_id": {1}}) is False

        assert callbacks == []
        delay.assert_not_called()
        assert "event_registered" in logger.error.call_args.args[0]

    def test_notify_many_counts_only_queued(
        self, user, other_user, delay, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            count = notify_many([user, other_user], "event_created", {"tags": {"a"}})

        assert count == 0
        delay.assert_not_called()
