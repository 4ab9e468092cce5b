"""
Entry points for domain code that wants a notification sent.

notify() never delivers inline. It enqueues deliver_notification once the
surrounding database transaction commits, so a worker never sees a
recipient or entity that was rolled back, and the request never waits on
the push provider.
"""

from __future__ import annotations

import json
import logging
from functools import partial

from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from notifications.registry import resolve_type
from notifications.services import DEFAULT_CHANNELS, normalize_channels

logger = logging.getLogger(__name__)


def _task_payload(recipient_id, notification_type, data, channels) -> dict:
    return {
        "recipient_id": recipient_id,
        "notification_type": resolve_type(notification_type).value,
        # Coerce UUIDs, datetimes and decimals to JSON-safe values
        "data": json.loads(json.dumps(data or {}, cls=DjangoJSONEncoder)),
        "channels": normalize_channels(channels),
    }


def _enqueue(payload: dict) -> None:
    from notifications.tasks import deliver_notification

    try:
        deliver_notification.delay(**payload)
    except Exception as e:
        logger.error(
            f"Failed to enqueue {payload['notification_type']} notification "
            f"for user {payload['recipient_id']}: {e}"
        )


def notify(recipient, notification_type, data: dict | None = None, channels=DEFAULT_CHANNELS) -> bool:
    """
    Queue one notification for delivery after commit.

    Returns False when the payload cannot be built. Broker errors at
    enqueue time are logged; neither reaches the caller.
    """
    try:
        payload = _task_payload(recipient.pk, notification_type, data, channels)
    except Exception as e:
        logger.error(
            f"Failed to build notification payload for user {recipient.pk}: "
            f"type={notification_type} error={e}"
        )
        return False

    transaction.on_commit(partial(_enqueue, payload), robust=True)
    logger.debug(
        f"Queued {payload['notification_type']} notification for user {recipient.pk}"
    )
    return True


def notify_many(recipients, notification_type, data: dict | None = None, channels=DEFAULT_CHANNELS) -> int:
    """
    Queue the same notification for several recipients.

    Each recipient gets an independent task, so one failure never blocks
    the others.

    Returns:
        Number of tasks queued
    """
    return sum(1 for recipient in recipients if notify(recipient, notification_type, data, channels))
