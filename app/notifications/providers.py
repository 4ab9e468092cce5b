"""
Firebase Cloud Messaging transport.

FirebasePushClient is the only module that talks to firebase_admin. It
converts PlatformEnvelopes into messaging.Message objects and exposes the
four calls the gateway needs: send, send_each, subscribe, unsubscribe.

Configuration (settings):
    FIREBASE_CREDENTIALS_PATH: Service-account JSON file
    PUSH_REQUEST_TIMEOUT_SECONDS: HTTP timeout for every FCM call

Usage:
    from notifications.providers import FirebasePushClient

    client = FirebasePushClient.from_settings()  # raises PushConfigurationError
    message_id = client.send(envelopes)
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import firebase_admin
from django.conf import settings
from firebase_admin import credentials, messaging
from firebase_admin.exceptions import FirebaseError

from notifications.exceptions import PushConfigurationError, PushDeliveryError

if TYPE_CHECKING:
    from notifications.formatters import PlatformEnvelopes

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "notifications"


def build_message(envelopes: PlatformEnvelopes) -> messaging.Message:
    """Convert provider-neutral envelopes into a firebase Message."""
    android = envelopes.android
    apns = envelopes.apns
    webpush = envelopes.webpush

    android_config = None
    if android:
        android_config = messaging.AndroidConfig(
            priority=android.get("priority", "normal"),
            data=android.get("data"),
            notification=messaging.AndroidNotification(**android.get("notification", {})),
        )

    apns_config = None
    if apns:
        aps = apns.get("aps", {})
        alert = aps.get("alert", {})
        custom = {k: v for k, v in apns.get("custom", {}).items() if v is not None}
        apns_config = messaging.APNSConfig(
            headers=apns.get("headers"),
            payload=messaging.APNSPayload(
                aps=messaging.Aps(
                    alert=messaging.ApsAlert(
                        title=alert.get("title"),
                        subtitle=alert.get("subtitle"),
                        body=alert.get("body"),
                    ),
                    badge=aps.get("badge"),
                    sound=aps.get("sound"),
                    category=aps.get("category"),
                    thread_id=aps.get("thread-id"),
                    mutable_content=bool(aps.get("mutable-content")),
                    content_available=bool(aps.get("content-available")),
                ),
                **custom,
            ),
        )

    webpush_config = None
    if webpush:
        notification = webpush.get("notification", {})
        webpush_config = messaging.WebpushConfig(
            notification=messaging.WebpushNotification(
                title=notification.get("title"),
                body=notification.get("body"),
                icon=notification.get("icon"),
                badge=notification.get("badge"),
                require_interaction=notification.get("requireInteraction"),
            )
        )

    return messaging.Message(
        token=envelopes.token,
        notification=messaging.Notification(
            title=envelopes.notification.get("title"),
            body=envelopes.notification.get("body"),
        ),
        data=envelopes.data,
        android=android_config,
        apns=apns_config,
        webpush=webpush_config,
    )


class FirebasePushClient:
    """
    Thin wrapper over firebase_admin.messaging bound to one Firebase app.

    Every call raises PushDeliveryError on provider failure; callers decide
    whether that is fatal.
    """

    def __init__(self, app: firebase_admin.App):
        self.app = app

    @classmethod
    def from_settings(cls) -> FirebasePushClient:
        """
        Initialise the Firebase app from settings.

        Raises:
            PushConfigurationError: Credentials path unset, missing or invalid
        """
        path = getattr(settings, "FIREBASE_CREDENTIALS_PATH", "") or ""
        if not path:
            raise PushConfigurationError("FIREBASE_CREDENTIALS_PATH is not set")
        if not os.path.exists(path):
            raise PushConfigurationError(
                "Firebase credentials file not found",
                details={"path": path},
            )

        try:
            return cls(firebase_admin.get_app(FIREBASE_APP_NAME))
        except ValueError:
            pass

        timeout = getattr(settings, "PUSH_REQUEST_TIMEOUT_SECONDS", 10)
        try:
            app = firebase_admin.initialize_app(
                credentials.Certificate(path),
                options={"httpTimeout": timeout},
                name=FIREBASE_APP_NAME,
            )
        except (ValueError, OSError) as e:
            raise PushConfigurationError(
                "Firebase initialization failed",
                details={"path": path, "original_error": str(e)},
            ) from e

        logger.info(f"Firebase push client initialised (timeout={timeout}s)")
        return cls(app)

    def send(self, envelopes: PlatformEnvelopes) -> str:
        """Send one message; returns the provider message id."""
        try:
            return messaging.send(build_message(envelopes), app=self.app)
        except (FirebaseError, ValueError) as e:
            raise PushDeliveryError(str(e), details={"service": "fcm"}) from e

    def send_each(self, envelopes: list[PlatformEnvelopes]) -> list[bool]:
        """Send one message per envelope; returns per-message success flags."""
        if not envelopes:
            return []
        try:
            response = messaging.send_each(
                [build_message(item) for item in envelopes], app=self.app
            )
        except (FirebaseError, ValueError) as e:
            raise PushDeliveryError(str(e), details={"service": "fcm"}) from e
        return [item.success for item in response.responses]

    def subscribe(self, token: str, topic: str) -> None:
        self._manage_topic(messaging.subscribe_to_topic, token, topic)

    def unsubscribe(self, token: str, topic: str) -> None:
        self._manage_topic(messaging.unsubscribe_from_topic, token, topic)

    def _manage_topic(self, call, token: str, topic: str) -> None:
        try:
            response = call([token], topic, app=self.app)
        except (FirebaseError, ValueError) as e:
            raise PushDeliveryError(
                str(e), details={"service": "fcm", "topic": topic}
            ) from e
        if response.failure_count:
            reason = response.errors[0].reason if response.errors else "unknown"
            raise PushDeliveryError(
                f"Topic operation failed: {reason}",
                details={"service": "fcm", "topic": topic},
            )
