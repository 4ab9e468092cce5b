"""
Django admin configuration for notification models.

Registers:
- Notification (read-only, for debugging and support)
- UserNotificationPreference
"""

from django.contrib import admin

from notifications.models import Notification, UserNotificationPreference


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for Notification.

    Records are created by the dispatcher, so every field is read-only.
    """

    list_display = [
        "id",
        "notification_type",
        "category",
        "recipient",
        "read_at",
        "viewed_at",
        "created_at",
    ]
    list_filter = ["category", "notification_type", "created_at"]
    search_fields = ["notification_type", "recipient__email"]
    ordering = ["-created_at"]
    readonly_fields = [
        "recipient",
        "notification_type",
        "category",
        "data",
        "read_at",
        "viewed_at",
        "created_at",
        "updated_at",
    ]
    raw_id_fields = ["recipient"]

    def has_add_permission(self, request):
        """Notifications are created by the system, not manually."""
        return False


@admin.register(UserNotificationPreference)
class UserNotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = [
        "user",
        "push_notifications",
        "email_notifications",
        "in_app_notifications",
        "updated_at",
    ]
    list_filter = ["push_notifications", "email_notifications", "in_app_notifications"]
    search_fields = ["user__email"]
    raw_id_fields = ["user"]
    readonly_fields = ["created_at", "updated_at"]
