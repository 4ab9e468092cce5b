"""
Send a sample notification to check the delivery pipeline end to end.

Usage:
    python manage.py send_test_notification 42
    python manage.py send_test_notification jane@example.com --type=comment_added
    python manage.py send_test_notification 42 --mobile
    python manage.py send_test_notification --all

Without --mobile the notification goes through the dispatcher (stored and
pushed); with --mobile only the push path runs.
"""

from __future__ import annotations

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.models import Notification
from notifications.registry import NotificationType
from notifications.wiring import get_services

SAMPLE_DATA = {
    NotificationType.POST_LIKED: {
        "title": "Post Liked",
        "body": "Someone liked your post",
        "post_id": 1,
        "liker_id": 2,
        "liker_name": "Test User",
    },
    NotificationType.COMMENT_ADDED: {
        "title": "New Comment",
        "body": "Someone commented on your post",
        "post_id": 1,
        "comment_id": 1,
        "commenter_id": 2,
        "commenter_name": "Test User",
    },
    NotificationType.EVENT_REMINDER: {
        "title": "Event Reminder",
        "body": 'Your event "Tech Conference" starts in 1 hour',
        "event_id": 1,
        "event_name": "Tech Conference",
    },
    NotificationType.JOB_APPLICATION_RECEIVED: {
        "title": "New Job Application",
        "body": "Test User applied for Senior Developer position",
        "job_id": 1,
        "application_id": 1,
        "applicant_name": "Test User",
        "job_title": "Senior Developer",
    },
    NotificationType.MESSAGE_RECEIVED: {
        "title": "New Message",
        "body": "Test User: Hello there",
        "sender_id": 2,
        "sender_name": "Test User",
        "message_preview": "Hello there",
    },
    NotificationType.HACKATHON_TEAM_INVITED: {
        "title": "Team Invitation",
        "body": 'You have been invited to join "Code Warriors" team',
        "hackathon_id": 1,
        "team_id": 1,
        "team_name": "Code Warriors",
        "inviter_name": "Test User",
    },
}


def sample_data(notification_type: NotificationType) -> dict:
    data = {
        "title": "Test Notification",
        "body": (
            f"This is a test {notification_type.value} notification sent at "
            f"{timezone.localtime():%H:%M:%S}"
        ),
        "test_mode": True,
    }
    data.update(SAMPLE_DATA.get(notification_type, {}))
    return data


class Command(BaseCommand):
    help = "Send a sample notification to one user or every user with a device"

    def add_arguments(self, parser):
        parser.add_argument("user", nargs="?", help="User id or email")
        parser.add_argument(
            "--type",
            default=NotificationType.POST_LIKED.value,
            help="Notification type value (default: post_liked)",
        )
        parser.add_argument(
            "--mobile",
            action="store_true",
            help="Send only the push notification",
        )
        parser.add_argument(
            "--all",
            action="store_true",
            help="Send to every user with a registered device",
        )

    def handle(self, *args, **options):
        try:
            notification_type = NotificationType(options["type"])
        except ValueError:
            raise CommandError(
                f"Invalid notification type: {options['type']}\n"
                f"Available types: {', '.join(NotificationType.values)}"
            )

        users = self._get_users(options["user"], options["all"])
        data = sample_data(notification_type)
        services = get_services()
        started = timezone.now()
        sent = failed = 0

        for user in users:
            self.stdout.write(f"Sending to: {user.get_full_name()} ({user.email})")
            if options["mobile"]:
                if not user.fcm_token:
                    self.stdout.write(self.style.WARNING("  User has no device token"))
                    failed += 1
                elif services.mobile.send_to_user(user, notification_type, data):
                    self.stdout.write(self.style.SUCCESS("  Mobile notification sent"))
                    sent += 1
                else:
                    self.stdout.write(self.style.ERROR("  Failed to send mobile notification"))
                    failed += 1
                continue

            result = services.dispatcher.send(
                user, notification_type, data, channels=["database", "push"]
            )
            if result.failures:
                self.stdout.write(self.style.ERROR(f"  Failed: {result.failures}"))
                failed += 1
            else:
                self.stdout.write(self.style.SUCCESS("  Notification sent"))
                sent += 1

        self.stdout.write("")
        self.stdout.write("=== Summary ===")
        self.stdout.write(self.style.SUCCESS(f"Success: {sent}"))
        if failed:
            self.stdout.write(self.style.WARNING(f"Failed: {failed}"))

        if not options["mobile"]:
            since = started - timedelta(minutes=1)
            for user in users:
                count = Notification.objects.for_recipient(user).filter(
                    created_at__gte=since
                ).count()
                self.stdout.write(f"  {user.get_full_name()}: {count} new notification(s)")

    def _get_users(self, identifier, send_to_all):
        User = get_user_model()

        if send_to_all:
            users = list(User.objects.with_push_device())
            self.stdout.write(f"Sending test notification to {len(users)} users with devices...")
            return users

        if not identifier:
            raise CommandError("Provide a user id or email, or use --all")

        lookup = {"pk": identifier} if str(identifier).isdigit() else {"email": identifier}
        user = User.objects.filter(**lookup).first()
        if user is None:
            raise CommandError(f"User not found: {identifier}")
        return [user]
