"""
User manager for email-based accounts.

Besides the usual create helpers it exposes the queryset of users that can
receive push notifications, used by broadcast tooling.

Related files:
    - models.py: User model that uses this manager
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for User with email as the login field.

    Usage:
        User.objects.create_user(email="ada@example.com", password="secret")
        User.objects.create_superuser(email="ops@example.com", password="secret")
        User.objects.with_push_device()
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create a regular account.

        A user created without a password gets an unusable one; such accounts
        only authenticate through tokens issued elsewhere.

        Raises:
            ValueError: If email is empty
        """
        if not email:
            raise ValueError("The Email field must be set")

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        user = self.model(email=self.normalize_email(email), **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create an admin account with staff access and a verified email."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("email_verified", True)
        extra_fields.setdefault("role", "admin")

        for flag in ("is_staff", "is_superuser"):
            if extra_fields.get(flag) is not True:
                raise ValueError(f"Superuser must have {flag}=True.")

        return self.create_user(email, password, **extra_fields)

    def with_push_device(self):
        """Active users holding a registered push token."""
        return (
            self.get_queryset()
            .filter(is_active=True, fcm_token__isnull=False)
            .exclude(fcm_token="")
        )
