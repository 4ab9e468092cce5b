"""
Views for notification API.

ViewSets:
    NotificationViewSet: Inbox, preferences, device registration and test push

Endpoints:
    Inbox:
        GET /api/v1/notifications/ - List user's notifications (paginated, filtered)
        GET /api/v1/notifications/{id}/ - Notification detail with navigation (marks read)
        DELETE /api/v1/notifications/{id}/ - Delete one notification
        GET /api/v1/notifications/unread-count/ - Get unread count
        POST /api/v1/notifications/{id}/read/ - Mark single notification as read
        POST /api/v1/notifications/{id}/view/ - Mark single notification as viewed
        POST /api/v1/notifications/read-all/ - Mark all notifications as read
        POST /api/v1/notifications/view-all/ - Mark all notifications as viewed
        DELETE /api/v1/notifications/clear/ - Delete all notifications

    Preferences:
        GET /api/v1/notifications/preferences/ - Current preferences
        PATCH /api/v1/notifications/preferences/ - Update preferences

    Devices:
        POST /api/v1/notifications/device/ - Register push device
        DELETE /api/v1/notifications/device/ - Remove push device
        POST /api/v1/notifications/test/ - Send a test push to own device

Usage:
    # In urls.py
    from rest_framework.routers import SimpleRouter
    from notifications.views import NotificationViewSet

    router = SimpleRouter()
    router.register(r"", NotificationViewSet, basename="notification")
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from drf_spectacular.utils import (
    extend_schema,
    extend_schema_view,
    OpenApiParameter,
    OpenApiResponse,
)

from notifications.pagination import NotificationPagination
from notifications.serializers import (
    DeviceRegistrationResponseSerializer,
    DeviceRegistrationSerializer,
    MarkedCountSerializer,
    NotificationDetailSerializer,
    NotificationSerializer,
    PreferenceSerializer,
    TestNotificationResponseSerializer,
    UnreadCountSerializer,
)
from notifications.services import InboxService, PreferenceService
from notifications.wiring import get_services


def _not_found() -> Response:
    return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_notifications",
        summary="List notifications",
        description=(
            "Get paginated list of notifications for the authenticated user, "
            "newest first. Supports filtering by read status and type."
        ),
        parameters=[
            OpenApiParameter(
                name="filter",
                type=str,
                location=OpenApiParameter.QUERY,
                description="Filter by read status",
                enum=["read", "unread"],
                required=False,
            ),
            OpenApiParameter(
                name="type",
                type=str,
                location=OpenApiParameter.QUERY,
                description="Filter by notification type (substring match)",
                required=False,
            ),
        ],
        tags=["Notifications - Inbox"],
    ),
    retrieve=extend_schema(
        operation_id="get_notification",
        summary="Get notification",
        description=(
            "Get a notification with its navigation payload. "
            "Opening a notification marks it as read."
        ),
        responses={
            200: NotificationDetailSerializer,
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications - Inbox"],
    ),
    destroy=extend_schema(
        operation_id="delete_notification",
        summary="Delete notification",
        responses={
            204: OpenApiResponse(description="Notification deleted"),
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications - Inbox"],
    ),
)
class NotificationViewSet(viewsets.GenericViewSet):
    """
    ViewSet for notification operations.

    Filtering:
    - ?filter=read|unread - Filter by read status
    - ?type=fragment - Case-insensitive substring of the type identifier

    Permissions:
    - All endpoints require authentication
    - Users can only access their own notifications; another user's
      notification is reported as not found
    """

    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer
    pagination_class = NotificationPagination

    def get_queryset(self):
        return InboxService.list_notifications(
            self.request.user,
            read_filter=self.request.query_params.get("filter"),
            type_fragment=self.request.query_params.get("type"),
        )

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):
        result = InboxService.get_details(request.user, pk)
        if not result.success:
            return _not_found()
        return Response(NotificationDetailSerializer(result.data).data)

    def destroy(self, request, pk=None):
        result = InboxService.delete_notification(request.user, pk)
        if not result.success:
            return _not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="get_unread_notification_count",
        summary="Get unread notification count",
        description="Get the count of unread notifications for badge display.",
        responses={200: UnreadCountSerializer},
        tags=["Notifications - Inbox"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        """
        Returns:
            {"count": <int>}
        """
        serializer = UnreadCountSerializer({"count": InboxService.unread_count(request.user)})
        return Response(serializer.data)

    @extend_schema(
        operation_id="mark_notification_read",
        summary="Mark notification as read",
        description=(
            "Mark a single notification as read. "
            "This operation is idempotent - already-read notifications return success."
        ),
        request=None,
        responses={
            200: NotificationSerializer,
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications - Inbox"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        result = InboxService.mark_as_read(request.user, pk)
        if not result.success:
            return _not_found()
        return Response(self.get_serializer(result.data).data)

    @extend_schema(
        operation_id="mark_notification_viewed",
        summary="Mark notification as viewed",
        request=None,
        responses={
            200: NotificationSerializer,
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications - Inbox"],
    )
    @action(detail=True, methods=["post"])
    def view(self, request, pk=None):
        result = InboxService.mark_as_viewed(request.user, pk)
        if not result.success:
            return _not_found()
        return Response(self.get_serializer(result.data).data)

    @extend_schema(
        operation_id="mark_all_notifications_read",
        summary="Mark all notifications as read",
        request=None,
        responses={200: MarkedCountSerializer},
        tags=["Notifications - Inbox"],
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        result = InboxService.mark_all_as_read(request.user)
        return Response(MarkedCountSerializer({"marked_count": result.data}).data)

    @extend_schema(
        operation_id="mark_all_notifications_viewed",
        summary="Mark all notifications as viewed",
        request=None,
        responses={200: MarkedCountSerializer},
        tags=["Notifications - Inbox"],
    )
    @action(detail=False, methods=["post"], url_path="view-all")
    def view_all(self, request):
        result = InboxService.mark_all_as_viewed(request.user)
        return Response(MarkedCountSerializer({"marked_count": result.data}).data)

    @extend_schema(
        operation_id="clear_notifications",
        summary="Delete all notifications",
        request=None,
        responses={204: OpenApiResponse(description="All notifications deleted")},
        tags=["Notifications - Inbox"],
    )
    @action(detail=False, methods=["delete"])
    def clear(self, request):
        InboxService.clear(request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    @extend_schema(
        methods=["GET"],
        operation_id="get_notification_preferences",
        summary="Get notification preferences",
        description="Current switches; defaults (all enabled) when never saved.",
        responses={200: PreferenceSerializer},
        tags=["Notifications - Preferences"],
    )
    @extend_schema(
        methods=["PATCH"],
        operation_id="update_notification_preferences",
        summary="Update notification preferences",
        description=(
            "Create or update preferences. notification_types is merged into "
            "the stored category switches."
        ),
        request=PreferenceSerializer,
        responses={
            200: PreferenceSerializer,
            400: OpenApiResponse(description="Validation error"),
        },
        tags=["Notifications - Preferences"],
    )
    @action(detail=False, methods=["get", "patch"])
    def preferences(self, request):
        if request.method == "GET":
            result = PreferenceService.get_preferences(request.user)
            return Response(PreferenceSerializer(result.data).data)

        serializer = PreferenceSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = PreferenceService.update_preferences(
            request.user, **serializer.validated_data
        )
        if not result.success:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response(PreferenceSerializer(result.data).data)

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    @extend_schema(
        methods=["POST"],
        operation_id="register_push_device",
        summary="Register push device",
        description=(
            "Store the device token (replacing any previous device) and "
            "subscribe it to the user's topics."
        ),
        request=DeviceRegistrationSerializer,
        responses={200: DeviceRegistrationResponseSerializer},
        tags=["Notifications - Devices"],
    )
    @extend_schema(
        methods=["DELETE"],
        operation_id="remove_push_device",
        summary="Remove push device",
        request=None,
        responses={204: OpenApiResponse(description="Device removed")},
        tags=["Notifications - Devices"],
    )
    @action(detail=False, methods=["post", "delete"])
    def device(self, request):
        registry = get_services().devices

        if request.method == "DELETE":
            registry.remove_device(request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = DeviceRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = registry.register_device(
            request.user,
            token=serializer.validated_data["fcm_token"],
            device_type=serializer.validated_data.get("device_type"),
            device_info=serializer.validated_data.get("device_info"),
        )
        return Response(DeviceRegistrationResponseSerializer(result.to_dict()).data)

    @extend_schema(
        operation_id="send_test_notification",
        summary="Send test push notification",
        description="Send a canned notification to the caller's registered device.",
        request=None,
        responses={
            200: TestNotificationResponseSerializer,
            400: OpenApiResponse(description="No device registered"),
            500: OpenApiResponse(description="Push delivery failed"),
        },
        tags=["Notifications - Devices"],
    )
    @action(detail=False, methods=["post"])
    def test(self, request):
        if not request.user.fcm_token:
            return Response(
                {"success": False, "message": "No device registered for push notifications"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if get_services().mobile.send_test(request.user):
            return Response({"success": True, "message": "Test notification sent"})

        return Response(
            {"success": False, "message": "Failed to send test notification"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
