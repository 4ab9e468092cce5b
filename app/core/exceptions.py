"""
Application error types.

Hierarchy:
    BaseApplicationError
    └── ExternalServiceError - a provider call (push, mail) failed

Domain apps subclass these and set default_error_code; see
notifications.exceptions. Errors carry a machine-readable code and a
details dict that is written to logs, never to API responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base for errors raised by service code.

    Attributes:
        message: Human-readable description
        error_code: Machine-readable code, defaults to default_error_code
        details: Extra context for logs (provider name, ids, original error)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ExternalServiceError(BaseApplicationError):
    """A call to a third-party provider failed or was refused."""

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
