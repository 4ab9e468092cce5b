"""
Mobile app notification middleware.

For authenticated requests from the mobile app (X-Mobile-App header):
    - Adds X-Notification-Count (unread count) to the response for the
      app icon badge
    - Re-registers the device when X-FCM-Token differs from the stored
      token, using X-Device-Type, X-App-Version and X-OS-Version

Runs after the view so that users authenticated by DRF (JWT) are visible
on request.user. Nothing here ever changes the response status.

Settings:
    MIDDLEWARE = [
        ...
        "notifications.middleware.MobileNotificationMiddleware",
    ]
"""

from __future__ import annotations

import logging

from notifications.models import Notification

logger = logging.getLogger(__name__)

MOBILE_APP_HEADER = "X-Mobile-App"
FCM_TOKEN_HEADER = "X-FCM-Token"
NOTIFICATION_COUNT_HEADER = "X-Notification-Count"


class MobileNotificationMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        user = getattr(request, "user", None)
        if not (user and user.is_authenticated and request.headers.get(MOBILE_APP_HEADER)):
            return response

        try:
            unread = Notification.objects.for_recipient(user).unread().count()
            response[NOTIFICATION_COUNT_HEADER] = str(unread)
        except Exception as e:
            logger.error(f"Failed to compute badge count for user {user.pk}: {e}")

        self._refresh_device(request, user)
        return response

    def _refresh_device(self, request, user) -> None:
        """Re-register when the app reports a token other than the stored one."""
        token = request.headers.get(FCM_TOKEN_HEADER)
        if not token or not user.fcm_token or token == user.fcm_token:
            return

        from notifications.wiring import get_services

        try:
            get_services().devices.register_device(
                user,
                token=token,
                device_type=request.headers.get("X-Device-Type"),
                device_info={
                    "app_version": request.headers.get("X-App-Version"),
                    "os_version": request.headers.get("X-OS-Version"),
                },
            )
        except Exception as e:
            logger.error(f"Failed to refresh push token for user {user.pk}: {e}")
