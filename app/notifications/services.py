"""
Notification service layer.

Services:
    NotificationService: Dispatcher. Persists the in-app record and fans out
        to push and mail according to the recipient's preferences
    InboxService: Read-side operations scoped to the recipient
    PreferenceService: Read and upsert a user's notification preferences

Design Principles:
    - The dispatcher is an instance built once in notifications.wiring with
      its collaborators (mobile push path, mail sender)
    - Inbox and preference services are stateless (class methods)
    - Expected failures return ServiceResult.failure()
    - Each dispatch channel runs in its own error boundary: a push outage
      never loses the in-app record, and vice versa

Usage:
    from notifications.wiring import get_services

    result = get_services().dispatcher.send(
        recipient=user,
        notification_type=NotificationType.COMMENT_ADDED,
        data={"post_id": 7, "title": "New Comment", "body": "Nice post!"},
    )
    result.notification  # stored Notification
    result.skipped       # {"push": "no_device_token"}

    InboxService.mark_as_read(user, notification_id)
    PreferenceService.update_preferences(user, push_notifications=False)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError as DjangoValidationError

from core.services import BaseService, ServiceResult
from notifications.models import (
    DeliveryChannel,
    Notification,
    SkipReason,
    UserNotificationPreference,
)
from notifications.navigation import build_navigation
from notifications.preferences import PreferenceResolver
from notifications.registry import metadata, resolve_type

if TYPE_CHECKING:
    from authentication.models import User
    from django.db.models import QuerySet

    from notifications.mobile import MobilePushService
    from toolkit.protocols import EmailSender


DEFAULT_CHANNELS = (DeliveryChannel.DATABASE, DeliveryChannel.PUSH)

CHANNEL_ALIASES = {
    "database": DeliveryChannel.DATABASE,
    "push": DeliveryChannel.PUSH,
    "mail": DeliveryChannel.MAIL,
    "email": DeliveryChannel.MAIL,
}


def normalize_channels(channels) -> list[str]:
    """Map channel names (and the "email" alias) to DeliveryChannel values."""
    normalized = []
    for channel in channels or ():
        value = CHANNEL_ALIASES.get(str(channel).lower())
        if value and value not in normalized:
            normalized.append(value)
    return normalized


@dataclass
class DispatchResult:
    """
    Outcome of one NotificationService.send call.

    Attributes:
        notification: Stored record (None if not requested or failed)
        push_sent: Whether the push provider accepted the message
        mail_sent: Whether the mail sender reported success
        skipped: channel -> SkipReason for channels not attempted
        failures: channel -> error message for channels that failed
    """

    notification: Notification | None = None
    push_sent: bool = False
    mail_sent: bool = False
    skipped: dict[str, str] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def persisted(self) -> bool:
        return self.notification is not None


class NotificationService(BaseService):
    """
    Dispatcher: decides which channels run for one notification.

    Attributes:
        mobile: Device-aware push path
        mailer: Mail collaborator (EmailService in production)
    """

    def __init__(self, mobile: MobilePushService, mailer: EmailSender):
        self.mobile = mobile
        self.mailer = mailer

    def send(
        self,
        recipient: User,
        notification_type,
        data: dict[str, Any] | None = None,
        channels=DEFAULT_CHANNELS,
    ) -> DispatchResult:
        """
        Dispatch one notification to one recipient.

        Flow:
            1. database requested -> store the record (preferences ignored)
            2. Resolve preferences (fail-open)
            3. push requested, allowed, token present -> mobile push
            4. mail requested, allowed, address present -> mail sender

        Not idempotent: each call stores a new record. Callers guard
        against notifying the actor about their own action.
        """
        notification_type = resolve_type(notification_type)
        data = dict(data or {})
        channels = normalize_channels(channels)
        category = metadata(notification_type).category
        result = DispatchResult()
        logger = self.get_logger()

        if DeliveryChannel.DATABASE in channels:
            try:
                result.notification = Notification.objects.create(
                    recipient=recipient,
                    notification_type=notification_type.value,
                    category=category,
                    data=data,
                )
            except Exception as e:
                logger.error(
                    f"Failed to store {notification_type.value} notification "
                    f"for user {recipient.pk}: {e}"
                )
                result.failures[DeliveryChannel.DATABASE] = str(e)

        preferences = PreferenceResolver.resolve(recipient)

        if DeliveryChannel.PUSH in channels:
            self._push(recipient, notification_type, data, category, preferences, result)

        if DeliveryChannel.MAIL in channels:
            self._mail(recipient, notification_type, data, category, preferences, result)

        logger.info(
            f"Dispatched {notification_type.value} to user {recipient.pk}: "
            f"stored={result.persisted} push={result.push_sent} "
            f"mail={result.mail_sent} skipped={result.skipped}"
        )
        return result

    def _skip_reason(self, preferences, channel: str, category: str) -> str | None:
        if not preferences.is_category_enabled(category):
            return SkipReason.CATEGORY_DISABLED
        if not preferences.is_channel_enabled(channel, category):
            return SkipReason.CHANNEL_DISABLED
        return None

    def _push(self, recipient, notification_type, data, category, preferences, result):
        reason = self._skip_reason(preferences, DeliveryChannel.PUSH, category)
        if reason is None and not recipient.fcm_token:
            reason = SkipReason.NO_DEVICE_TOKEN
        if reason:
            result.skipped[DeliveryChannel.PUSH] = reason
            return

        try:
            result.push_sent = self.mobile.send_to_user(recipient, notification_type, data)
        except Exception as e:
            self.get_logger().error(
                f"Push for {notification_type.value} to user {recipient.pk} failed: {e}"
            )
            result.failures[DeliveryChannel.PUSH] = str(e)
            return
        if not result.push_sent:
            result.failures[DeliveryChannel.PUSH] = "provider rejected or unavailable"

    def _mail(self, recipient, notification_type, data, category, preferences, result):
        reason = self._skip_reason(preferences, DeliveryChannel.MAIL, category)
        if reason is None and not recipient.email:
            reason = SkipReason.NO_EMAIL
        if reason:
            result.skipped[DeliveryChannel.MAIL] = reason
            return

        subject = data.get("title") or metadata(notification_type).default_title
        try:
            result.mail_sent = bool(
                self.mailer.send_raw(
                    to=recipient.email,
                    subject=subject,
                    body_text=data.get("body") or "",
                )
            )
        except Exception as e:
            self.get_logger().error(
                f"Mail for {notification_type.value} to user {recipient.pk} failed: {e}"
            )
            result.failures[DeliveryChannel.MAIL] = str(e)
            return
        if not result.mail_sent:
            result.failures[DeliveryChannel.MAIL] = "mail sender reported failure"

    def send_batch(
        self,
        recipients,
        notification_type,
        data: dict[str, Any] | None = None,
        channels=DEFAULT_CHANNELS,
    ) -> dict[str, int]:
        """
        Dispatch the same notification to several recipients.

        Continues past individual failures.

        Returns:
            {"sent": n, "failed": n}
        """
        counts = {"sent": 0, "failed": 0}
        for recipient in recipients:
            try:
                result = self.send(recipient, notification_type, data, channels)
            except Exception as e:
                self.get_logger().error(
                    f"Batch notification to user {recipient.pk} failed: {e}"
                )
                counts["failed"] += 1
                continue
            if DeliveryChannel.DATABASE in result.failures:
                counts["failed"] += 1
            else:
                counts["sent"] += 1
        return counts


class InboxService(BaseService):
    """
    Recipient-scoped inbox operations.

    Every lookup filters by recipient, so another user's notification is
    indistinguishable from a missing one (NOT_FOUND).
    """

    READ_FILTERS = ("read", "unread")

    @classmethod
    def list_notifications(
        cls,
        user: User,
        read_filter: str | None = None,
        type_fragment: str | None = None,
    ) -> QuerySet[Notification]:
        """
        Recipient's notifications, newest first.

        Args:
            read_filter: "read", "unread" or None for all
            type_fragment: Substring of the type identifier
        """
        queryset = Notification.objects.for_recipient(user)
        if read_filter == "unread":
            queryset = queryset.unread()
        elif read_filter == "read":
            queryset = queryset.read()
        if type_fragment:
            queryset = queryset.matching_type(type_fragment)
        return queryset.order_by("-created_at")

    @classmethod
    def unread_count(cls, user: User) -> int:
        return Notification.objects.for_recipient(user).unread().count()

    @classmethod
    def get_notification(cls, user: User, notification_id) -> ServiceResult[Notification]:
        try:
            notification = Notification.objects.for_recipient(user).get(pk=notification_id)
        except (Notification.DoesNotExist, DjangoValidationError, ValueError):
            return ServiceResult.failure("Notification not found", error_code="NOT_FOUND")
        return ServiceResult.success(notification)

    @classmethod
    def mark_as_read(cls, user: User, notification_id) -> ServiceResult[Notification]:
        """
        Mark a single notification as read.

        Idempotent: an already-read notification keeps its original read_at.

        Error codes:
            NOT_FOUND: No such notification for this user
        """
        result = cls.get_notification(user, notification_id)
        if not result.success:
            return result
        if result.data.mark_as_read():
            cls.get_logger().debug(f"Marked notification {notification_id} as read")
        return result

    @classmethod
    def mark_as_viewed(cls, user: User, notification_id) -> ServiceResult[Notification]:
        result = cls.get_notification(user, notification_id)
        if not result.success:
            return result
        result.data.mark_as_viewed()
        return result

    @classmethod
    def mark_all_as_read(cls, user: User) -> ServiceResult[int]:
        count = Notification.objects.for_recipient(user).mark_all_read()
        cls.get_logger().info(f"Marked {count} notifications as read for user {user.pk}")
        return ServiceResult.success(count)

    @classmethod
    def mark_all_as_viewed(cls, user: User) -> ServiceResult[int]:
        count = Notification.objects.for_recipient(user).mark_all_viewed()
        return ServiceResult.success(count)

    @classmethod
    def delete_notification(cls, user: User, notification_id) -> ServiceResult[None]:
        result = cls.get_notification(user, notification_id)
        if not result.success:
            return result
        result.data.delete()
        return ServiceResult.success(None)

    @classmethod
    def clear(cls, user: User) -> ServiceResult[int]:
        count, _ = Notification.objects.for_recipient(user).delete()
        cls.get_logger().info(f"Cleared {count} notifications for user {user.pk}")
        return ServiceResult.success(count)

    @classmethod
    def get_details(cls, user: User, notification_id) -> ServiceResult[dict[str, Any]]:
        """
        Notification plus its navigation payload; marks it read.

        Returns:
            ServiceResult with {"notification": Notification, "navigation": dict}
        """
        result = cls.mark_as_read(user, notification_id)
        if not result.success:
            return result
        notification = result.data
        navigation = build_navigation(notification.notification_type, notification.data)
        return ServiceResult.success(
            {"notification": notification, "navigation": navigation.to_dict()}
        )


class PreferenceService(BaseService):
    """User notification preference management."""

    FIELDS = (
        "email_notifications",
        "push_notifications",
        "in_app_notifications",
        "notification_types",
    )

    @classmethod
    def get_preferences(cls, user: User) -> ServiceResult[UserNotificationPreference]:
        """
        Stored preferences, or an unsaved all-enabled instance when none exist.
        """
        preference = UserNotificationPreference.objects.filter(user=user).first()
        if preference is None:
            preference = UserNotificationPreference(user=user)
        return ServiceResult.success(preference)

    @classmethod
    def update_preferences(cls, user: User, **changes) -> ServiceResult[UserNotificationPreference]:
        """
        Create or update the user's preferences.

        notification_types is merged into the stored mapping, so a client can
        switch one category without resending the others.
        """
        unknown = sorted(set(changes) - set(cls.FIELDS))
        if unknown:
            return ServiceResult.failure(
                "Unknown preference fields",
                error_code="VALIDATION_ERROR",
                errors={name: ["Unknown field."] for name in unknown},
            )

        with cls.atomic():
            preference, created = UserNotificationPreference.objects.select_for_update().get_or_create(
                user=user
            )
            types = changes.pop("notification_types", None)
            if types is not None:
                merged = dict(preference.notification_types or {})
                merged.update({str(k): bool(v) for k, v in types.items()})
                preference.notification_types = merged
            for name, value in changes.items():
                setattr(preference, name, bool(value))
            preference.save()

        PreferenceResolver.invalidate_cache(user.pk)
        cls.get_logger().info(
            f"{'Created' if created else 'Updated'} notification preferences for user {user.pk}"
        )
        return ServiceResult.success(preference)
