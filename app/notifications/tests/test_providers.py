"""
Tests for the Firebase push transport.

firebase_admin is mocked at the module boundary; no network calls are made.
"""

from types import SimpleNamespace

import pytest
from firebase_admin.exceptions import FirebaseError

from notifications.exceptions import PushConfigurationError, PushDeliveryError
from notifications.formatters import PushFormatter
from notifications.providers import FIREBASE_APP_NAME, FirebasePushClient, build_message
from notifications.registry import NotificationType


@pytest.fixture
def envelopes():
    return PushFormatter().format(
        "fcm-token-123",
        NotificationType.EVENT_REMINDER,
        {
            "title": "Event Reminder",
            "body": "Tech Talk starts in 1 hour",
            "subtitle": "Main Hall",
            "event_id": 9,
            "priority": "high",
            "badge_count": 2,
        },
    )


@pytest.fixture
def client(mocker):
    return FirebasePushClient(app=mocker.sentinel.app)


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "firebase.json"
    path.write_text("{}")
    return path


class TestFromSettings:
    """Tests for FirebasePushClient.from_settings()."""

    def test_missing_path_setting(self, settings):
        settings.FIREBASE_CREDENTIALS_PATH = ""

        with pytest.raises(PushConfigurationError) as exc_info:
            FirebasePushClient.from_settings()

        assert exc_info.value.error_code == "PUSH_NOT_CONFIGURED"

    def test_missing_file(self, settings, tmp_path):
        settings.FIREBASE_CREDENTIALS_PATH = str(tmp_path / "absent.json")

        with pytest.raises(PushConfigurationError) as exc_info:
            FirebasePushClient.from_settings()

        assert exc_info.value.details["path"].endswith("absent.json")

    def test_initializes_named_app_with_timeout(self, mocker, settings, credentials_file):
        settings.FIREBASE_CREDENTIALS_PATH = str(credentials_file)
        settings.PUSH_REQUEST_TIMEOUT_SECONDS = 7
        mocker.patch("notifications.providers.firebase_admin.get_app", side_effect=ValueError)
        certificate = mocker.patch("notifications.providers.credentials.Certificate")
        initialize = mocker.patch(
            "notifications.providers.firebase_admin.initialize_app",
            return_value=mocker.sentinel.app,
        )

        client = FirebasePushClient.from_settings()

        assert client.app is mocker.sentinel.app
        certificate.assert_called_once_with(str(credentials_file))
        initialize.assert_called_once_with(
            certificate.return_value,
            options={"httpTimeout": 7},
            name=FIREBASE_APP_NAME,
        )

    def test_reuses_existing_app(self, mocker, settings, credentials_file):
        settings.FIREBASE_CREDENTIALS_PATH = str(credentials_file)
        mocker.patch(
            "notifications.providers.firebase_admin.get_app",
            return_value=mocker.sentinel.existing,
        )
        initialize = mocker.patch("notifications.providers.firebase_admin.initialize_app")

        client = FirebasePushClient.from_settings()

        assert client.app is mocker.sentinel.existing
        initialize.assert_not_called()

    def test_invalid_credentials(self, mocker, settings, credentials_file):
        settings.FIREBASE_CREDENTIALS_PATH = str(credentials_file)
        mocker.patch("notifications.providers.firebase_admin.get_app", side_effect=ValueError)
        mocker.patch(
            "notifications.providers.credentials.Certificate",
            side_effect=ValueError("Invalid service account certificate"),
        )

        with pytest.raises(PushConfigurationError) as exc_info:
            FirebasePushClient.from_settings()

        assert "Invalid service account" in exc_info.value.details["original_error"]


class TestBuildMessage:
    def test_converts_envelopes(self, envelopes):
        message = build_message(envelopes)

        assert message.token == "fcm-token-123"
        assert message.notification.title == "Event Reminder"
        assert message.data["event_id"] == "9"
        assert message.android.priority == "high"
        assert message.android.notification.channel_id == "events"
        assert message.apns.headers["apns-priority"] == "10"
        assert message.apns.payload.aps.alert.subtitle == "Main Hall"
        assert message.apns.payload.aps.badge == 2
        assert message.apns.payload.aps.thread_id == "events"
        assert message.webpush.notification.require_interaction is True

    def test_none_custom_fields_are_dropped(self, envelopes):
        message = build_message(envelopes)

        assert "actor" not in message.apns.payload.custom_data
        assert message.apns.payload.custom_data["navigation"]["screen"] == "EventDetail"


class TestSend:
    def test_returns_message_id(self, mocker, client, envelopes):
        send = mocker.patch(
            "notifications.providers.messaging.send",
            return_value="projects/p/messages/1",
        )

        assert client.send(envelopes) == "projects/p/messages/1"
        assert send.call_args.kwargs["app"] is client.app

    def test_provider_error_is_wrapped(self, mocker, client, envelopes):
        mocker.patch(
            "notifications.providers.messaging.send",
            side_effect=FirebaseError("UNAVAILABLE", "backend down"),
        )

        with pytest.raises(PushDeliveryError) as exc_info:
            client.send(envelopes)

        assert exc_info.value.details == {"service": "fcm"}

    def test_send_each_reports_per_message(self, mocker, client, envelopes):
        mocker.patch(
            "notifications.providers.messaging.send_each",
            return_value=SimpleNamespace(
                responses=[SimpleNamespace(success=True), SimpleNamespace(success=False)]
            ),
        )

        assert client.send_each([envelopes, envelopes]) == [True, False]

    def test_send_each_empty(self, mocker, client):
        send_each = mocker.patch("notifications.providers.messaging.send_each")

        assert client.send_each([]) == []
        send_each.assert_not_called()


class TestTopics:
    def test_subscribe(self, mocker, client):
        subscribe = mocker.patch(
            "notifications.providers.messaging.subscribe_to_topic",
            return_value=SimpleNamespace(failure_count=0, errors=[]),
        )

        client.subscribe("tok", "all_users")

        subscribe.assert_called_once_with(["tok"], "all_users", app=client.app)

    def test_unsubscribe(self, mocker, client):
        unsubscribe = mocker.patch(
            "notifications.providers.messaging.unsubscribe_from_topic",
            return_value=SimpleNamespace(failure_count=0, errors=[]),
        )

        client.unsubscribe("tok", "role_student")

        unsubscribe.assert_called_once_with(["tok"], "role_student", app=client.app)

    def test_partial_failure_raises(self, mocker, client):
        mocker.patch(
            "notifications.providers.messaging.subscribe_to_topic",
            return_value=SimpleNamespace(
                failure_count=1, errors=[SimpleNamespace(reason="INVALID_ARGUMENT")]
            ),
        )

        with pytest.raises(PushDeliveryError, match="INVALID_ARGUMENT"):
            client.subscribe("tok", "pref_jobs")
