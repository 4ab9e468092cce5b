"""
Outbound transports used by notification delivery.

Only mail lives here; the push transport is notifications.providers.
"""

from toolkit.services.email import EmailService

__all__ = ["EmailService"]
