# Generated manually - initial schema for the custom user model

from django.db import migrations, models

import authentication.managers


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("email", models.EmailField(db_index=True, help_text="User's email address (primary identifier)", max_length=254, unique=True)),
                ("name", models.CharField(blank=True, help_text="Display name", max_length=150)),
                ("role", models.CharField(blank=True, choices=[("student", "Student"), ("professional", "Professional"), ("company", "Company"), ("university", "University"), ("admin", "Admin")], default="", help_text="Platform role", max_length=20)),
                ("avatar", models.URLField(blank=True, default="", help_text="Avatar image URL", max_length=500)),
                ("avatar_color", models.CharField(blank=True, default="", help_text="Avatar fallback colour", max_length=32)),
                ("is_verified", models.BooleanField(default=False, help_text="Whether the account carries a verified badge")),
                ("email_verified", models.BooleanField(default=False, help_text="Whether the user's email has been verified")),
                ("fcm_token", models.CharField(blank=True, help_text="Firebase Cloud Messaging token of the active device", max_length=512, null=True)),
                ("device_type", models.CharField(blank=True, choices=[("ios", "iOS"), ("android", "Android")], help_text="Platform of the registered device", max_length=10, null=True)),
                ("device_info", models.JSONField(blank=True, help_text="Device metadata (app_version, os_version)", null=True)),
                ("is_active", models.BooleanField(default=True, help_text="Whether this user account is active. Deselect instead of deleting.")),
                ("is_staff", models.BooleanField(default=False, help_text="Whether the user can access the admin site.")),
                ("date_joined", models.DateTimeField(auto_now_add=True, help_text="When the user account was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="When the user record was last modified")),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", authentication.managers.UserManager()),
            ],
        ),
    ]
