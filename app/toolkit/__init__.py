"""
Toolkit - outbound delivery utilities.

Key components:
    - services/email.py: EmailService, the mail channel of notifications
    - protocols.py: Interfaces for push and mail transports

Usage:
    from toolkit.services.email import EmailService
    from toolkit.protocols import EmailSender, PushClient

Note:
    - This app has no models.
"""
