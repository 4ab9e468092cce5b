"""
Notification system models.

This module defines the persisted state of the notification engine:
- Notification: In-app notification record for one recipient
- UserNotificationPreference: Per-user channel and category switches

Notification kinds are not a table: they are the closed
notifications.registry.NotificationType enum. The record stores the type
as a plain string so identifiers written by older releases survive and are
resolved through the registry at read time.

Design Decisions:
    - Notification uses a UUID primary key (ids are exposed to clients)
    - data is an exact snapshot of the payload passed at dispatch time,
      including denormalized actor fields
    - read_at and viewed_at are independent, set once and never cleared
    - Preferences are created lazily; a missing row means everything on

Usage:
    from notifications.models import Notification

    notification = Notification.objects.create(
        recipient=user,
        notification_type=NotificationType.POST_LIKED,
        category="social",
        data={"post_id": 42, "title": "New Like"},
    )

    Notification.objects.for_recipient(user).unread().count()
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import BaseModel, UUIDPrimaryKeyMixin
from notifications.registry import NotificationCategory, metadata, resolve_type


class NotificationQuerySet(models.QuerySet):
    """Chainable filters used by the inbox."""

    def for_recipient(self, user):
        return self.filter(recipient=user)

    def unread(self):
        return self.filter(read_at__isnull=True)

    def read(self):
        return self.filter(read_at__isnull=False)

    def unviewed(self):
        return self.filter(viewed_at__isnull=True)

    def matching_type(self, fragment: str):
        """Case-insensitive substring match on the stored type identifier."""
        return self.filter(notification_type__icontains=fragment)

    def mark_all_read(self) -> int:
        """Set read_at on every unread row; returns the number changed."""
        return self.unread().update(read_at=timezone.now(), updated_at=timezone.now())

    def mark_all_viewed(self) -> int:
        return self.unviewed().update(viewed_at=timezone.now(), updated_at=timezone.now())


class Notification(UUIDPrimaryKeyMixin, BaseModel):
    """
    In-app notification record.

    Fields:
        recipient: User receiving the notification (scopes all queries)
        notification_type: Type identifier (NotificationType value or legacy string)
        category: Category at dispatch time
        data: Payload snapshot exactly as dispatched
        read_at: When the recipient read it (null = unread)
        viewed_at: When the recipient saw it in a list (null = unseen)

    Inherits:
        id: UUID (UUIDPrimaryKeyMixin)
        created_at / updated_at: Timestamps (BaseModel)

    Note:
        - recipient CASCADE: Notifications deleted when user deleted
        - Mutated only by read/view/delete operations of the recipient
    """

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="User receiving this notification",
    )

    notification_type = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Notification type identifier",
    )

    category = models.CharField(
        max_length=20,
        choices=NotificationCategory.choices,
        default=NotificationCategory.SYSTEM,
        help_text="Notification category at dispatch time",
    )

    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Payload snapshot (ids, title, body, actor fields)",
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the recipient read this notification",
    )

    viewed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the recipient saw this notification in a list",
    )

    objects = NotificationQuerySet.as_manager()

    class Meta:
        db_table = "notifications_notification"
        ordering = ["-created_at"]
        indexes = [
            # Primary query: user's unread notifications
            models.Index(
                fields=["recipient", "read_at", "-created_at"],
                name="notif_recipient_read_idx",
            ),
            models.Index(
                fields=["recipient", "notification_type"],
                name="notif_recipient_type_idx",
            ),
        ]

    def __str__(self) -> str:
        read_status = "read" if self.is_read else "unread"
        return (
            f"Notification({self.notification_type}) -> "
            f"User {self.recipient_id} [{read_status}]"
        )

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    @property
    def is_viewed(self) -> bool:
        return self.viewed_at is not None

    @property
    def resolved_type(self):
        return resolve_type(self.notification_type)

    @property
    def title(self) -> str:
        return (self.data or {}).get("title") or metadata(self.notification_type).default_title

    @property
    def body(self) -> str:
        return (self.data or {}).get("body") or ""

    def mark_as_read(self) -> bool:
        """
        Set read_at if not already set.

        Returns:
            True if this call changed the row, False if it was already read
        """
        if self.read_at is not None:
            return False
        now = timezone.now()
        changed = Notification.objects.filter(pk=self.pk, read_at__isnull=True).update(
            read_at=now, updated_at=now
        )
        self.refresh_from_db(fields=["read_at", "updated_at"])
        return bool(changed)

    def mark_as_viewed(self) -> bool:
        if self.viewed_at is not None:
            return False
        now = timezone.now()
        changed = Notification.objects.filter(
            pk=self.pk, viewed_at__isnull=True
        ).update(viewed_at=now, updated_at=now)
        self.refresh_from_db(fields=["viewed_at", "updated_at"])
        return bool(changed)


def default_category_preferences() -> dict[str, bool]:
    return {choice: True for choice in NotificationCategory.values}


class UserNotificationPreference(BaseModel):
    """
    Notification switches for one user.

    Fields:
        user: Owner (one row per user, created on first update)
        email_notifications: Mail channel on/off
        push_notifications: Push channel on/off
        in_app_notifications: In-app list on/off (records are still stored)
        notification_types: Mapping category -> enabled; missing = enabled

    Usage:
        prefs, _ = UserNotificationPreference.objects.get_or_create(user=user)
        prefs.is_category_enabled("jobs")
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_preferences",
        help_text="User these preferences belong to",
    )
    email_notifications = models.BooleanField(default=True)
    push_notifications = models.BooleanField(default=True)
    in_app_notifications = models.BooleanField(default=True)
    notification_types = models.JSONField(
        default=default_category_preferences,
        blank=True,
        help_text="Category switches, e.g. {'social': true, 'jobs': false}",
    )

    class Meta:
        db_table = "notifications_user_preference"
        verbose_name = "notification preference"
        verbose_name_plural = "notification preferences"

    def __str__(self) -> str:
        return f"NotificationPreference(user={self.user_id})"

    def is_category_enabled(self, category: str) -> bool:
        return bool((self.notification_types or {}).get(category, True))

    def enabled_categories(self) -> list[str]:
        """Every known category that is not switched off, plus extra enabled keys."""
        types = self.notification_types or {}
        enabled = [c for c in NotificationCategory.values if types.get(c, True)]
        enabled.extend(k for k, v in types.items() if v and k not in enabled)
        return enabled


class DeliveryChannel(models.TextChoices):
    """Delivery channels a dispatch can request."""

    DATABASE = "database", "In-app"
    PUSH = "push", "Push Notification"
    MAIL = "mail", "Email"


class SkipReason(models.TextChoices):
    """Standardized reasons for a channel being skipped."""

    CATEGORY_DISABLED = "category_disabled", "Category disabled"
    CHANNEL_DISABLED = "channel_disabled", "Channel disabled by user"
    NO_DEVICE_TOKEN = "no_device_token", "No device token"
    NO_EMAIL = "no_email", "No email address"
