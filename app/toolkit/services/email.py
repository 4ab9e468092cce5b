"""
Email service for plain notification mail.

This module provides the EmailService class, the mail channel of the
notification dispatcher. It sends pre-rendered subject/body pairs through
Django's mail framework, so the transport is chosen by EMAIL_BACKEND.

Configuration:
    Email settings are read from Django settings:
    - EMAIL_BACKEND
    - EMAIL_HOST, EMAIL_PORT
    - DEFAULT_FROM_EMAIL

Usage:
    from toolkit.services.email import EmailService

    EmailService.send_raw(
        to="user@example.com",
        subject="Application Accepted",
        body_text="Your application for Backend Engineer was accepted.",
    )
"""

from __future__ import annotations

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)


class EmailService:
    """
    Centralized email sending.

    send_raw reports failure as False instead of raising, matching the
    non-fatal contract of every notification channel.
    """

    @staticmethod
    def _build(
        to: list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> EmailMultiAlternatives:
        email = EmailMultiAlternatives(
            subject=subject,
            body=body_text,
            from_email=from_email or settings.DEFAULT_FROM_EMAIL,
            to=to,
            reply_to=[reply_to] if reply_to else None,
        )
        if body_html:
            email.attach_alternative(body_html, "text/html")
        return email

    @staticmethod
    def send_raw(
        to: str | list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
        from_email: str | None = None,
        reply_to: str | None = None,
    ) -> bool:
        """
        Send email with pre-rendered content.

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            body_text: Plain text email body
            body_html: HTML email body (optional)
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Reply-to address

        Returns:
            True if email was sent successfully
        """
        if isinstance(to, str):
            to = [to]

        email = EmailService._build(to, subject, body_text, body_html, from_email, reply_to)
        try:
            email.send(fail_silently=False)
        except (SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {len(to)} recipient(s): {subject}: {e}")
            return False

        logger.info(f"Email sent to {len(to)} recipient(s): {subject}")
        return True

