"""
URL configuration for notifications API.

Routes:
    /                     - List notifications (GET)
    /{id}/                - Notification detail (GET), delete (DELETE)
    /unread-count/        - Get unread count (GET)
    /{id}/read/           - Mark single as read (POST)
    /{id}/view/           - Mark single as viewed (POST)
    /read-all/            - Mark all as read (POST)
    /view-all/            - Mark all as viewed (POST)
    /clear/               - Delete all (DELETE)
    /preferences/         - Get / update preferences (GET, PATCH)
    /device/              - Register / remove push device (POST, DELETE)
    /test/                - Send test push (POST)
"""

from rest_framework.routers import SimpleRouter

from notifications.views import NotificationViewSet

# No API root view: at the empty prefix it would shadow the list route
router = SimpleRouter()
router.register(r"", NotificationViewSet, basename="notification")

app_name = "notifications"
urlpatterns = router.urls
