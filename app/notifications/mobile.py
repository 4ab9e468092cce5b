"""
Device-aware mobile push.

Builds the enhanced payload the mobile app renders (navigation, visual
metadata, actor card, badge count, sound, priority) and hands it to the
push gateway for the user's registered device.

Usage:
    from notifications.wiring import get_services

    mobile = get_services().mobile
    mobile.send_to_user(user, NotificationType.COMMENT_ADDED, {"post_id": 7})
    mobile.send_batch_to_users(users, NotificationType.EVENT_REMINDER, data)
    # {"success": 2, "failed": 0, "no_token": 1}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.contrib.auth import get_user_model
from django.utils import timezone

from core.services import BaseService
from notifications.navigation import build_navigation
from notifications.registry import NotificationType, metadata, resolve_type

if TYPE_CHECKING:
    from authentication.models import User

    from notifications.gateway import PushGateway

logger = logging.getLogger(__name__)

# Payload keys checked, in order, for the user who caused the notification
ACTOR_ID_KEYS = (
    "actor_id",
    "liker_id",
    "commenter_id",
    "replier_id",
    "inviter_id",
    "sender_id",
    "viewer_id",
    "applicant_id",
    "user_id",
)

TEST_NOTIFICATION_DATA = {
    "title": "Test Notification",
    "body": "This is a test notification",
    "post_id": 1,
    "test_mode": True,
}


def find_actor(actor_id) -> dict[str, Any] | None:
    """Actor card for a user id, or None when the user does not exist."""
    if actor_id in (None, ""):
        return None
    try:
        actor = get_user_model().objects.get(pk=actor_id)
    except (get_user_model().DoesNotExist, ValueError, TypeError):
        return None
    return actor.actor_payload()


def resolve_actor_id(data: dict):
    for key in ACTOR_ID_KEYS:
        if data.get(key):
            return data[key]
    return None


class MobilePushService(BaseService):
    """
    Push path used by the dispatcher.

    Attributes:
        gateway: PushGateway that formats and ships the message
        actor_lookup: Callable id -> actor card (None when unknown)
    """

    def __init__(self, gateway: PushGateway, actor_lookup=find_actor):
        self.gateway = gateway
        self.actor_lookup = actor_lookup

    def build_payload(self, user: User, notification_type, data: dict | None) -> dict[str, Any]:
        """
        Merge the mobile-only fields into the caller's payload.

        badge_count is the recipient's unread count plus one, since the
        notification being pushed may not be stored yet. It is a
        point-in-time value.
        """
        from notifications.models import Notification

        data = dict(data or {})
        notification_type = resolve_type(notification_type)
        meta = metadata(notification_type)

        actor_id = resolve_actor_id(data)
        unread = Notification.objects.for_recipient(user).unread().count()

        return {
            **data,
            "notification_type": notification_type.value,
            "category": meta.category,
            "timestamp": data.get("timestamp") or timezone.now().isoformat(),
            "user_id": user.pk,
            "navigation": build_navigation(notification_type, data).to_dict(),
            "icon": meta.icon,
            "action_icon": meta.action_icon,
            "icon_color": meta.icon_color,
            "background_color": meta.background_color,
            "overlay_color": meta.overlay_color,
            "actor": self.actor_lookup(actor_id) if actor_id is not None else None,
            "badge_count": unread + 1,
            "sound": meta.sound,
            "priority": str(meta.priority),
        }

    def send_to_user(self, user: User, notification_type, data: dict | None = None) -> bool:
        """
        Push a notification to the user's registered device.

        Returns:
            False (with a warning) when the user has no token, otherwise the
            gateway result
        """
        if not user.fcm_token:
            self.get_logger().warning(f"User {user.pk} has no FCM token, push skipped")
            return False

        payload = self.build_payload(user, notification_type, data)
        return self.gateway.send(user.fcm_token, notification_type, payload)

    def send_batch_to_users(
        self, users, notification_type, data: dict | None = None
    ) -> dict[str, int]:
        """
        Push the same notification to several users, one at a time.

        Returns:
            {"success": n, "failed": n, "no_token": n}
        """
        results = {"success": 0, "failed": 0, "no_token": 0}
        for user in users:
            if not user.fcm_token:
                results["no_token"] += 1
                continue
            try:
                sent = self.send_to_user(user, notification_type, data)
            except Exception as e:
                self.get_logger().error(f"Push to user {user.pk} failed: {e}")
                sent = False
            results["success" if sent else "failed"] += 1

        self.get_logger().info(
            f"Batch {resolve_type(notification_type).value} push: {results}"
        )
        return results

    def send_test(self, user: User) -> bool:
        """Send a canned post_liked notification through the full push path."""
        data = {**TEST_NOTIFICATION_DATA, "timestamp": timezone.now().isoformat()}
        return self.send_to_user(user, NotificationType.POST_LIKED, data)
