"""Error taxonomy shared by the workflow, the auth gateway and the API layer.

Services raise these; the exception handlers installed in ``canteen.main``
translate them to JSON responses using ``http_status``.
"""

from __future__ import annotations

from typing import Any, Mapping


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class CanteenError(Exception):
    """Base for every error that maps onto an HTTP response."""

    http_status = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: Mapping[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(CanteenError):
    """Malformed or missing input."""

    http_status = 400
    default_message = "Invalid input"


class AuthError(CanteenError):
    """Missing session or bad credentials."""

    http_status = 401
    default_message = "Not authenticated"


class ForbiddenError(CanteenError):
    """Authenticated, but not allowed to do this."""

    http_status = 403
    default_message = "Forbidden"


class NotFoundError(CanteenError):
    http_status = 404
    default_message = "Not found"


class ConflictError(CanteenError):
    """Duplicate unique value, e.g. a taken username."""

    http_status = 400
    default_message = "Conflict"


class StoreError(CanteenError):
    """The database rejected or failed an operation.

    The message is always generic; the underlying exception is logged where it
    is caught, never returned to the caller.
    """

    http_status = 500
    default_message = "Database operation failed"
