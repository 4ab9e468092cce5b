"""
Push delivery gateway.

Formats a notification for every target platform and ships it through the
push client, one token or many. Every public method is non-fatal: provider
failures are logged and reported as False (or as failed tokens), never
raised to the caller.

When no client could be initialised the gateway runs in degraded mode:
each call logs a warning and reports failure, while in-app notifications
keep working.

Usage:
    from notifications.gateway import PushGateway

    gateway = PushGateway(client=FirebasePushClient.from_settings())
    gateway.send(user.fcm_token, NotificationType.COMMENT_ADDED, data)

    result = gateway.send_batch(tokens, NotificationType.EVENT_REMINDER, data)
    result.success  # tokens that were accepted
    result.failed   # tokens that were rejected
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from notifications.formatters import PushFormatter
from notifications.registry import resolve_type

if TYPE_CHECKING:
    from toolkit.protocols import PushClient

logger = logging.getLogger(__name__)


def redact_token(token: str | None) -> str:
    """First ten characters of a device token, for logs."""
    if not token:
        return "<none>"
    return f"{token[:10]}..."


@dataclass
class PushBatchResult:
    success: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"success": list(self.success), "failed": list(self.failed)}


class PushGateway:
    """
    Sends formatted pushes through a PushClient.

    Attributes:
        client: Push transport, or None when push is unavailable
        formatter: Builds per-platform envelopes
    """

    def __init__(
        self,
        client: PushClient | None = None,
        formatter: PushFormatter | None = None,
    ):
        self.client = client
        self.formatter = formatter or PushFormatter()

    @property
    def is_available(self) -> bool:
        return self.client is not None

    def send(self, token: str, notification_type, data: dict | None = None) -> bool:
        """
        Send one push to one device token.

        Returns:
            True if the provider accepted the message
        """
        notification_type = resolve_type(notification_type)
        if self.client is None:
            logger.warning(
                f"Push client not initialised, skipping {notification_type.value} "
                f"push to {redact_token(token)}"
            )
            return False
        if not token:
            return False

        try:
            envelopes = self.formatter.format(token, notification_type, data)
            message_id = self.client.send(envelopes)
        except Exception as e:
            logger.error(
                f"Failed to send {notification_type.value} push to "
                f"{redact_token(token)}: {e}"
            )
            return False

        logger.info(
            f"Sent {notification_type.value} push to {redact_token(token)} "
            f"(message_id={message_id})"
        )
        return True

    def send_batch(
        self, tokens: list[str], notification_type, data: dict | None = None
    ) -> PushBatchResult:
        """
        Send the same notification to several tokens independently.

        A failure for one token never affects another. If the whole provider
        call fails, every token is reported as failed.
        """
        notification_type = resolve_type(notification_type)
        result = PushBatchResult()
        tokens = [token for token in tokens if token]
        if not tokens:
            return result

        if self.client is None:
            logger.warning(
                f"Push client not initialised, skipping {notification_type.value} "
                f"batch of {len(tokens)}"
            )
            result.failed.extend(tokens)
            return result

        try:
            envelopes = [
                self.formatter.format(token, notification_type, data) for token in tokens
            ]
            outcomes = self.client.send_each(envelopes)
        except Exception as e:
            logger.error(
                f"Batch {notification_type.value} push to {len(tokens)} tokens failed: {e}"
            )
            result.failed.extend(tokens)
            return result

        for token, accepted in zip(tokens, outcomes):
            if accepted:
                result.success.append(token)
            else:
                logger.warning(
                    f"Provider rejected {notification_type.value} push to "
                    f"{redact_token(token)}"
                )
                result.failed.append(token)

        logger.info(
            f"Batch {notification_type.value} push: {len(result.success)} sent, "
            f"{len(result.failed)} failed"
        )
        return result

    def subscribe_to_topic(self, token: str, topic: str) -> bool:
        return self._topic_call("subscribe", token, topic)

    def unsubscribe_from_topic(self, token: str, topic: str) -> bool:
        return self._topic_call("unsubscribe", token, topic)

    def _topic_call(self, operation: str, token: str, topic: str) -> bool:
        if self.client is None:
            logger.warning(
                f"Push client not initialised, cannot {operation} "
                f"{redact_token(token)} to topic {topic}"
            )
            return False

        try:
            getattr(self.client, operation)(token, topic)
        except Exception as e:
            logger.error(
                f"Failed to {operation} {redact_token(token)} to topic {topic}: {e}"
            )
            return False

        logger.info(f"Token {redact_token(token)} {operation}d to topic {topic}")
        return True
