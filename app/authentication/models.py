"""
Authentication models.

This module defines the custom User model with email-based authentication.
Besides credentials, the user row carries:
- Display identity shown as the "actor" of notifications (name, avatar,
  avatar colour, role, verified badge)
- The single active push device registration (fcm_token, device_type,
  device_info)

Related files:
    - managers.py: Custom user manager for email-based creation
    - notifications/devices.py: Writes the device registration fields

Security:
    - User passwords hashed with Django's password hashers
    - Device tokens are never logged in full
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        name: Display name shown on notifications
        role: Platform role (drives the role_<role> push topic)
        avatar: Avatar image URL
        avatar_color: Fallback avatar colour when no image is set
        is_verified: Verified badge shown next to the name
        email_verified: Whether the user's email has been verified
        fcm_token: Current push token (at most one per user)
        device_type: Platform of the registered device (ios/android)
        device_info: Free-form device metadata (app and OS version)

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
            name='Ada Lovelace',
        )
    """

    class Role(models.TextChoices):
        """Platform roles."""

        STUDENT = "student", "Student"
        PROFESSIONAL = "professional", "Professional"
        COMPANY = "company", "Company"
        UNIVERSITY = "university", "University"
        ADMIN = "admin", "Admin"

    class DeviceType(models.TextChoices):
        """Push device platforms."""

        IOS = "ios", "iOS"
        ANDROID = "android", "Android"

    # Primary identifier (replaces username)
    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    # Display identity
    name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Display name",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        blank=True,
        default="",
        help_text="Platform role",
    )
    avatar = models.URLField(
        max_length=500,
        blank=True,
        default="",
        help_text="Avatar image URL",
    )
    avatar_color = models.CharField(
        max_length=32,
        blank=True,
        default="",
        help_text="Avatar fallback colour",
    )
    is_verified = models.BooleanField(
        default=False,
        help_text="Whether the account carries a verified badge",
    )

    # Email verification status
    email_verified = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been verified",
    )

    # Push device registration (overwritten wholesale on each registration)
    fcm_token = models.CharField(
        max_length=512,
        blank=True,
        null=True,
        help_text="Firebase Cloud Messaging token of the active device",
    )
    device_type = models.CharField(
        max_length=10,
        choices=DeviceType.choices,
        blank=True,
        null=True,
        help_text="Platform of the registered device",
    )
    device_info = models.JSONField(
        blank=True,
        null=True,
        help_text="Device metadata (app_version, os_version)",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(" ")[0] if self.name else self.email.split("@")[0]

    @property
    def has_push_device(self) -> bool:
        return bool(self.fcm_token)

    def actor_payload(self) -> dict:
        """Identity snapshot embedded in notifications this user triggers."""
        return {
            "id": self.id,
            "name": self.get_full_name(),
            "avatar": self.avatar or None,
            "avatar_color": self.avatar_color or None,
            "role": self.role or None,
            "is_verified": self.is_verified,
        }
