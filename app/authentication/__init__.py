"""
Authentication application.

Provides the custom email-based User model, which also carries the display
identity used in notifications and the user's push device registration.

Usage:
    from authentication.models import User
"""
