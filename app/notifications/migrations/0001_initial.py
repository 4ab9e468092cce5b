# Generated manually - initial schema for notifications

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import notifications.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="When the row was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="When the row was last saved")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("notification_type", models.CharField(db_index=True, help_text="Notification type identifier", max_length=255)),
                ("category", models.CharField(choices=[("social", "Social"), ("events", "Events"), ("jobs", "Jobs"), ("internships", "Internships"), ("hackathons", "Hackathons"), ("messages", "Messages"), ("admin", "Admin"), ("system", "System")], default="system", help_text="Notification category at dispatch time", max_length=20)),
                ("data", models.JSONField(blank=True, default=dict, help_text="Payload snapshot (ids, title, body, actor fields)")),
                ("read_at", models.DateTimeField(blank=True, help_text="When the recipient read this notification", null=True)),
                ("viewed_at", models.DateTimeField(blank=True, help_text="When the recipient saw this notification in a list", null=True)),
                ("recipient", models.ForeignKey(help_text="User receiving this notification", on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications_notification",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "read_at", "-created_at"], name="notif_recipient_read_idx"),
                    models.Index(fields=["recipient", "notification_type"], name="notif_recipient_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="UserNotificationPreference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="When the row was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="When the row was last saved")),
                ("email_notifications", models.BooleanField(default=True)),
                ("push_notifications", models.BooleanField(default=True)),
                ("in_app_notifications", models.BooleanField(default=True)),
                ("notification_types", models.JSONField(blank=True, default=notifications.models.default_category_preferences, help_text="Category switches, e.g. {'social': true, 'jobs': false}")),
                ("user", models.OneToOneField(help_text="User these preferences belong to", on_delete=django.db.models.deletion.CASCADE, related_name="notification_preferences", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications_user_preference",
                "verbose_name": "notification preference",
                "verbose_name_plural": "notification preferences",
            },
        ),
    ]
