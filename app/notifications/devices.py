"""
Push device registry.

A user has at most one active device registration, stored on the user row
(fcm_token, device_type, device_info). Registering overwrites the previous
one and subscribes the new token to the user's topics:

    all_users            every registered device
    role_<role>          when the user has a role
    pref_<category>      every category the user has not switched off

Topic subscription is best effort: a failed topic is logged and never rolls
back the stored token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from core.services import BaseService
from notifications.preferences import PreferenceResolver
from notifications.registry import NotificationCategory

if TYPE_CHECKING:
    from authentication.models import User

    from notifications.gateway import PushGateway

ALL_USERS_TOPIC = "all_users"


@dataclass
class DeviceRegistrationResult:
    success: bool
    message: str
    topics: list[str] = field(default_factory=list)
    failed_topics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message, "topics": list(self.topics)}


class DeviceRegistry(BaseService):
    def __init__(self, gateway: PushGateway):
        self.gateway = gateway

    def topics_for(self, user: User) -> list[str]:
        """Topics the user's device should be subscribed to."""
        topics = [ALL_USERS_TOPIC]
        if user.role:
            topics.append(f"role_{user.role}")

        preferences = PreferenceResolver.resolve(user)
        categories = list(NotificationCategory.values)
        categories.extend(c for c in preferences.categories if c not in categories)
        topics.extend(
            f"pref_{category}"
            for category in categories
            if preferences.is_category_enabled(category)
        )
        return topics

    def register_device(
        self,
        user: User,
        token: str,
        device_type: str | None = None,
        device_info: dict | None = None,
    ) -> DeviceRegistrationResult:
        """
        Store the device and subscribe it to the user's topics.

        The stored registration is overwritten unconditionally (last write
        wins).
        """
        user.fcm_token = token
        user.device_type = device_type or None
        user.device_info = device_info or None
        user.save(update_fields=["fcm_token", "device_type", "device_info", "updated_at"])

        topics = self.topics_for(user)
        failed = [
            topic for topic in topics if not self.gateway.subscribe_to_topic(token, topic)
        ]
        if failed:
            self.get_logger().error(
                f"User {user.pk} device registered but topic subscription failed for {failed}"
            )

        self.get_logger().info(
            f"Registered {device_type or 'unknown'} device for user {user.pk} "
            f"({len(topics) - len(failed)}/{len(topics)} topics)"
        )
        return DeviceRegistrationResult(
            success=True,
            message="Device registered successfully",
            topics=topics,
            failed_topics=failed,
        )

    def remove_device(self, user: User) -> None:
        """Forget the user's device. Topic subscriptions are left to expire."""
        user.fcm_token = None
        user.device_type = None
        user.device_info = None
        user.save(update_fields=["fcm_token", "device_type", "device_info", "updated_at"])
        self.get_logger().info(f"Removed push device for user {user.pk}")
