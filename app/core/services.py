"""
Service layer primitives.

ServiceResult carries expected failures (not found, invalid input) back to
views; unexpected failures raise. BaseService gives each service a named
logger and an explicit transaction boundary.

Usage:
    result = InboxService.mark_as_read(request.user, pk)
    if not result:
        return Response(result.to_response(), status=404)
    return Response(NotificationSerializer(result.data).data)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the call succeeded
        data: Payload on success
        error: Message on failure
        error_code: Machine-readable failure code ("NOT_FOUND", ...)
        errors: Field errors for validation failures
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        return cls(success=False, error=error, error_code=error_code, errors=errors)

    def to_response(self) -> dict[str, Any]:
        """Response body: data on success, error fields otherwise."""
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {"success": False, "error": self.error}
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base for service classes.

    Inbox and preference services are stateless classmethod services.
    Delivery services (dispatcher, mobile push, devices) are instances
    holding their collaborators, built once in notifications.wiring.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named "<module>.<ClassName>"."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the block in a database transaction.

        Example:
            with cls.atomic():
                preference.save()
                Notification.objects.create(...)
        """
        with transaction.atomic():
            yield
