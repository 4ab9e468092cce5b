"""
Serializers for notification API.

Serializers:
    NotificationSerializer: Read-only notification representation
    NotificationDetailSerializer: Notification plus navigation payload
    UnreadCountSerializer: Response for unread count endpoint
    MarkedCountSerializer: Response for read-all / view-all endpoints
    PreferenceSerializer: Read and partially update user preferences
    DeviceRegistrationSerializer: Register a push device
    DeviceRegistrationResponseSerializer: Registration outcome
    TestNotificationResponseSerializer: Test push outcome

Usage:
    from notifications.serializers import NotificationSerializer

    serializer = NotificationSerializer(notifications, many=True)
    data = serializer.data
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.models import User
from notifications.models import Notification, UserNotificationPreference
from notifications.registry import NotificationCategory


class NotificationSerializer(serializers.ModelSerializer):
    """
    Serializer for Notification model.

    title and body come from the stored payload, falling back to the type's
    default title.
    """

    title = serializers.CharField(read_only=True)
    body = serializers.CharField(read_only=True)
    is_read = serializers.BooleanField(read_only=True)
    is_viewed = serializers.BooleanField(read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "notification_type",
            "category",
            "title",
            "body",
            "data",
            "is_read",
            "read_at",
            "is_viewed",
            "viewed_at",
            "created_at",
        ]
        read_only_fields = fields


class NavigationSerializer(serializers.Serializer):
    screen = serializers.CharField()
    params = serializers.DictField()
    tab = serializers.CharField()
    sub_tab = serializers.CharField(required=False)


class NotificationDetailSerializer(serializers.Serializer):
    """Response for GET /{id}/."""

    notification = NotificationSerializer()
    navigation = NavigationSerializer()


class UnreadCountSerializer(serializers.Serializer):
    """
    Response serializer for unread count endpoint.

    Fields:
        count: Integer count of unread notifications
    """

    count = serializers.IntegerField()


class MarkedCountSerializer(serializers.Serializer):
    """
    Response serializer for bulk mark endpoints.

    Fields:
        marked_count: Number of notifications changed by this call
    """

    marked_count = serializers.IntegerField()


# ============================================================================
# Preference Serializers
# ============================================================================


class PreferenceSerializer(serializers.ModelSerializer):
    """
    User notification preferences.

    notification_types is a mapping of category -> enabled. On update it is
    merged into the stored mapping (see PreferenceService.update_preferences).
    """

    notification_types = serializers.DictField(
        child=serializers.BooleanField(),
        required=False,
        help_text="Category switches, e.g. {'social': true, 'jobs': false}",
    )

    class Meta:
        model = UserNotificationPreference
        fields = [
            "email_notifications",
            "push_notifications",
            "in_app_notifications",
            "notification_types",
        ]

    def validate_notification_types(self, value: dict[str, bool]) -> dict[str, bool]:
        unknown = [key for key in value if key not in NotificationCategory.values]
        if unknown:
            raise serializers.ValidationError(
                f"Unknown notification categories: {', '.join(sorted(unknown))}"
            )
        return value


# ============================================================================
# Device Serializers
# ============================================================================


class DeviceRegistrationSerializer(serializers.Serializer):
    """
    Push device registration.

    Fields:
        fcm_token: Firebase registration token of the device
        device_type: ios or android
        device_info: Free-form device details (model, app version, ...)
    """

    fcm_token = serializers.CharField(max_length=512)
    device_type = serializers.ChoiceField(
        choices=User.DeviceType.choices,
        required=False,
        allow_null=True,
        default=None,
    )
    device_info = serializers.DictField(required=False, allow_null=True, default=None)


class DeviceRegistrationResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    topics = serializers.ListField(child=serializers.CharField())


class TestNotificationResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()

