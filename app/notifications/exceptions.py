"""
Notification delivery exceptions.

Hierarchy:
    BaseApplicationError
    ├── ExternalServiceError
    │   ├── PushConfigurationError - push provider credentials missing or invalid
    │   └── PushDeliveryError - provider rejected or failed a call
    └── NotificationDeliveryError - the in-app record could not be persisted

Only NotificationDeliveryError escapes a Celery task (so the queue retries);
push errors are caught by the gateway and reported as a False result.
"""

from __future__ import annotations

from core.exceptions import BaseApplicationError, ExternalServiceError


class PushConfigurationError(ExternalServiceError):
    default_error_code: str = "PUSH_NOT_CONFIGURED"


class PushDeliveryError(ExternalServiceError):
    default_error_code: str = "PUSH_DELIVERY_FAILED"


class NotificationDeliveryError(BaseApplicationError):
    default_error_code: str = "NOTIFICATION_DELIVERY_FAILED"
