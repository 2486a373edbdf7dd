"""Error hierarchy for the dashboard client and stub backend.

All dashboard-specific errors extend DashboardError. The HTTP client wrapper
raises TransportError / EnvelopeError internally and converts them into
``success: false`` envelopes at its boundary, so callers never see them.
FormValidationError is raised by the mutation layer before any request is
sent. NotFoundError and StubValidationError are raised by the stub backend
and rendered by its exception handlers.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base error for all dashboard-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class TransportError(DashboardError):
    """Backend unreachable or responded with a non-2xx status."""

    status_code = 502
    message = "Backend request failed"


class EnvelopeError(DashboardError):
    """Backend body is not JSON or does not match the response envelope."""

    status_code = 502
    message = "Malformed response envelope"


class FormValidationError(DashboardError):
    """Required form fields missing — detected before any request is sent."""

    status_code = 422
    message = "Please fill in all required fields."

    def __init__(self, message: str | None = None, fields: list[str] | None = None) -> None:
        super().__init__(message, fields=fields or [])
        self.fields = fields or []


class NotFoundError(DashboardError):
    """Requested resource does not exist."""

    status_code = 404
    message = "Resource not found"


class StubValidationError(DashboardError):
    """Stub backend rejected a request payload."""

    status_code = 422
    message = "Validation error"
