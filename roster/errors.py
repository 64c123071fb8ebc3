"""Standardized error handling for the event roster.

This module provides:
1. The exception hierarchy raised by the codec, the controller and the clients
2. A standard error response model read by the presentation layer

Usage:
    from roster.errors import ValidationError, RemoteError

    # In the controller:
    if not name.strip():
        raise ValidationError(detail="Event name is required", field="name")

    # In the presentation layer:
    if controller.error is not None:
        payload = controller.error.to_response().model_dump(exclude_none=True)
"""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    detail: str | None = None
    field: str | None = None
    context: dict[str, Any] | None = None


class RosterError(Exception):
    """Base class for roster errors."""

    error: str = "internal_error"
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        field: str | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        self.field = field
        self.context = context if context else None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.error,
            detail=self.detail,
            field=self.field,
            context=self.context,
        )


class ValidationError(RosterError):
    """A form field failed local validation; nothing was sent."""

    error = "validation_error"
    detail = "Invalid form data"


class RemoteError(RosterError):
    """A create, update or delete call to the event store failed."""

    error = "remote_error"
    detail = "The event store request failed"


class SilentLoadError(RosterError):
    """A list or refetch call failed while loading data."""

    error = "load_error"
    detail = "Failed to load data"


class ExternalServiceError(RosterError):
    """Transport-level failure raised by a collaborator client."""

    error = "external_service_error"
    detail = "External service request failed"


class NotFoundError(ExternalServiceError):
    """The collaborator answered 404."""

    error = "not_found"
    detail = "Resource not found"


def status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        409: "conflict",
        422: "validation_error",
        429: "rate_limited",
        500: "internal_error",
        502: "bad_gateway",
        503: "service_unavailable",
        504: "gateway_timeout",
    }
    return mapping.get(status_code, "error")
