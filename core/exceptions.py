"""Exception hierarchy for the sleep challenge engine.

Services raise these typed errors so the application layer that owns
rendering and transport can translate them into user-facing messages without
inspecting driver- or library-specific exceptions.

Absent data is never an error here: "no data yet" is modelled as ``None`` and
returned like any other result.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base exception for all service layer errors."""

    code = "service_error"

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        """Extra fields describing the failure, empty for the base error."""

        return {}

    def to_dict(self) -> dict[str, Any]:
        """Return an error envelope suitable for API responses."""

        return {"code": self.code, "message": self.message, **self.context()}


class ValidationError(ServiceError):
    """Raised when caller-supplied input is malformed."""

    code = "validation_error"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def context(self) -> dict[str, Any]:
        return {"field": self.field}


class NotFoundError(ServiceError):
    code = "not_found"

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource

    def context(self) -> dict[str, Any]:
        return {"resource": self.resource}


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    code = "configuration_error"

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key

    def context(self) -> dict[str, Any]:
        return {"key": self.key}


class DatabaseError(ServiceError):
    """Raised when database operations fail."""

    code = "database_error"

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation

    def context(self) -> dict[str, Any]:
        return {"operation": self.operation}


__all__ = [
    "ConfigurationError",
    "DatabaseError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
]
