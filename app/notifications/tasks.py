"""
Celery tasks for notification delivery.

Decouples "something notable happened" from "the notification was
delivered". Request code enqueues with notifications.events.notify; a
worker runs deliver_notification, which hands the request to the
dispatcher.

Delivery contract:
    - At-least-once: tasks are acknowledged after they finish (acks_late),
      so a worker crash redelivers the task
    - Payload is JSON: recipient id, type value, data, channels
    - Only a failure to store the in-app record is retried (bounded,
      exponential backoff); push and mail failures are logged by the
      dispatcher and never retried
    - After retries are exhausted, on_failure logs recipient, type and error

Usage:
    from notifications.tasks import deliver_notification

    # Normally enqueued by notifications.events.notify()
    deliver_notification.delay(
        recipient_id=user.id,
        notification_type="post_liked",
        data={"post_id": 42},
        channels=["database", "push"],
    )
"""

from __future__ import annotations

import logging

from celery import Task, shared_task
from django.contrib.auth import get_user_model
from django.db import DatabaseError

from notifications.exceptions import NotificationDeliveryError
from notifications.models import DeliveryChannel
from notifications.services import DEFAULT_CHANNELS

logger = logging.getLogger(__name__)

MAX_RETRIES = 3


class NotificationTask(Task):
    """Base task that logs the notification context of a final failure."""

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        recipient_id = kwargs.get("recipient_id", args[0] if args else None)
        notification_type = kwargs.get(
            "notification_type", args[1] if len(args) > 1 else None
        )
        logger.error(
            f"Notification task {task_id} failed: user_id={recipient_id} "
            f"type={notification_type} error={exc}"
        )


@shared_task(
    bind=True,
    base=NotificationTask,
    acks_late=True,
    autoretry_for=(NotificationDeliveryError, DatabaseError),
    retry_backoff=True,
    retry_kwargs={"max_retries": MAX_RETRIES},
)
def deliver_notification(
    self,
    recipient_id,
    notification_type: str,
    data: dict | None = None,
    channels: list[str] | None = None,
) -> dict:
    """
    Dispatch one notification to one recipient.

    Args:
        recipient_id: Primary key of the recipient
        notification_type: NotificationType value (legacy identifiers accepted)
        data: JSON payload
        channels: Channel names; defaults to database + push

    Returns:
        Summary dict: status, notification_id, push_sent, mail_sent, skipped

    Raises:
        NotificationDeliveryError: The in-app record could not be stored
            (triggers retry)
    """
    from notifications.wiring import get_services

    try:
        recipient = get_user_model().objects.get(pk=recipient_id)
    except get_user_model().DoesNotExist:
        logger.warning(
            f"Recipient {recipient_id} not found, dropping {notification_type} notification"
        )
        return {"status": "skipped", "reason": "recipient_not_found"}

    result = get_services().dispatcher.send(
        recipient=recipient,
        notification_type=notification_type,
        data=data or {},
        channels=channels or list(DEFAULT_CHANNELS),
    )

    database_error = result.failures.get(DeliveryChannel.DATABASE)
    if database_error:
        logger.warning(
            f"Storing {notification_type} for user {recipient_id} failed "
            f"(attempt {self.request.retries + 1}/{MAX_RETRIES + 1}), will retry"
        )
        raise NotificationDeliveryError(
            "Notification record could not be stored",
            details={"recipient_id": recipient_id, "error": database_error},
        )

    return {
        "status": "delivered",
        "notification_id": str(result.notification.id) if result.notification else None,
        "push_sent": result.push_sent,
        "mail_sent": result.mail_sent,
        "skipped": dict(result.skipped),
    }
