"""
Explicit construction of the notification services.

Builds the delivery graph once per process, leaves first:

    PushFormatter -> FirebasePushClient -> PushGateway -> MobilePushService
        -> NotificationService (dispatcher)
        -> DeviceRegistry

A push client that cannot be initialised is logged once and the gateway
runs degraded; nothing else is affected.

Usage:
    from notifications.wiring import get_services

    services = get_services()
    services.dispatcher.send(user, NotificationType.POST_LIKED, data)
    services.devices.register_device(user, token, "ios")

Tests build their own graph with build_services(push_client=FakePushClient()).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from notifications.devices import DeviceRegistry
from notifications.exceptions import PushConfigurationError
from notifications.formatters import PushFormatter
from notifications.gateway import PushGateway
from notifications.mobile import MobilePushService
from notifications.providers import FirebasePushClient
from notifications.services import NotificationService
from toolkit.services.email import EmailService

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class NotificationServices:
    formatter: PushFormatter
    gateway: PushGateway
    mobile: MobilePushService
    dispatcher: NotificationService
    devices: DeviceRegistry


def _default_push_client():
    try:
        return FirebasePushClient.from_settings()
    except PushConfigurationError as e:
        logger.error(f"Push notifications disabled: {e.message} {e.details or ''}".rstrip())
        return None


def build_services(push_client=_UNSET, mailer=None) -> NotificationServices:
    """
    Build the service graph.

    Args:
        push_client: PushClient to use; None forces degraded mode; omitted
            means FirebasePushClient.from_settings()
        mailer: EmailSender (defaults to EmailService)
    """
    if push_client is _UNSET:
        push_client = _default_push_client()

    formatter = PushFormatter()
    gateway = PushGateway(client=push_client, formatter=formatter)
    mobile = MobilePushService(gateway)
    dispatcher = NotificationService(mobile=mobile, mailer=mailer or EmailService)
    devices = DeviceRegistry(gateway)
    return NotificationServices(
        formatter=formatter,
        gateway=gateway,
        mobile=mobile,
        dispatcher=dispatcher,
        devices=devices,
    )


@lru_cache(maxsize=1)
def get_services() -> NotificationServices:
    """Process-wide service graph, built on first use."""
    return build_services()
