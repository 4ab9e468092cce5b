from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """User accounts and the push device registered on each of them."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
    verbose_name = "Accounts and devices"
