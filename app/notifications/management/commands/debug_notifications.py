"""
Print a user's notification state for support and debugging.

Usage:
    python manage.py debug_notifications        # first user with notifications
    python manage.py debug_notifications 42
"""

from django.core.management.base import BaseCommand

from notifications.models import Notification

RECENT_LIMIT = 5


class Command(BaseCommand):
    help = "Display notification counts and the most recent notifications of a user"

    def add_arguments(self, parser):
        parser.add_argument("user_id", nargs="?", type=int)

    def handle(self, *args, **options):
        total = Notification.objects.count()
        self.stdout.write(f"Total notifications in database: {total}")
        if total == 0:
            self.stdout.write(self.style.WARNING("No notifications found in database"))
            return

        user_id = options["user_id"]
        if user_id is None:
            user_id = Notification.objects.order_by("created_at").values_list(
                "recipient_id", flat=True
            ).first()

        notifications = Notification.objects.filter(recipient_id=user_id)
        self.stdout.write("")
        self.stdout.write(f"Notifications for user ID: {user_id}")
        self.stdout.write(f"   Total: {notifications.count()}")
        self.stdout.write(f"   Unread: {notifications.unread().count()}")
        self.stdout.write(f"   Unviewed: {notifications.unviewed().count()}")

        recent = notifications.order_by("-created_at")[:RECENT_LIMIT]
        if recent:
            self.stdout.write("")
            self.stdout.write("Recent notifications:")
            for index, notification in enumerate(recent):
                status = "read" if notification.is_read else "unread"
                body = notification.body or "No message"
                self.stdout.write(
                    f"  {index}. [{status}] {notification.notification_type}: {body}"
                )
                self.stdout.write(f"     Created: {notification.created_at:%Y-%m-%d %H:%M:%S}")

        self.stdout.write(self.style.SUCCESS("Debugging complete"))
