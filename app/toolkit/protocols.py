"""
Protocol definitions (interfaces) for outbound delivery services.

Protocols define the contracts the notification engine depends on, so a
real transport and an in-memory fake are interchangeable:

    PushClient: Push provider transport (FCM in production)
    EmailSender: Plain email delivery

Usage:
    from toolkit.protocols import PushClient

    def build_gateway(client: PushClient) -> PushGateway:
        return PushGateway(client=client)

Note:
    - Protocols are primarily for type checking
    - @runtime_checkable allows isinstance() checks in tests and wiring
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from notifications.formatters import PlatformEnvelopes


@runtime_checkable
class PushClient(Protocol):
    """
    Protocol for push provider transports.

    Implementations raise on provider failure; the push gateway turns
    failures into boolean results.

    Example:
        class FakePushClient:
            def send(self, envelopes): return "msg-1"
            def send_each(self, envelopes): return [True] * len(envelopes)
            def subscribe(self, token, topic): pass
            def unsubscribe(self, token, topic): pass
    """

    def send(self, envelopes: PlatformEnvelopes) -> str:
        """Send one message and return the provider message id."""
        ...

    def send_each(self, envelopes: list[PlatformEnvelopes]) -> list[bool]:
        """Send several messages independently; one flag per message."""
        ...

    def subscribe(self, token: str, topic: str) -> None:
        """Subscribe a device token to a topic."""
        ...

    def unsubscribe(self, token: str, topic: str) -> None:
        """Unsubscribe a device token from a topic."""
        ...


@runtime_checkable
class EmailSender(Protocol):
    """
    Protocol for email sending services.

    Example:
        class ConsoleEmailSender:
            @staticmethod
            def send_raw(to, subject, body_text, body_html=None, **kwargs) -> bool:
                print(subject)
                return True
    """

    def send_raw(
        self,
        to: str | list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> bool:
        """Send an email with pre-rendered content."""
        ...
