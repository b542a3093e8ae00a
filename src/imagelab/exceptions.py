"""Service level exceptions mapped onto the HTTP error envelope."""

from __future__ import annotations

from fastapi import status

__all__ = [
    "ServiceError",
    "InputError",
    "ConfigurationError",
    "NotFoundError",
    "UpstreamError",
    "VendorTimeoutError",
]


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        details: str | None = None,
        suggestion: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.suggestion = suggestion
        if status_code is not None:
            self.status_code = status_code


class InputError(ServiceError):
    """Raised when the request misses or carries an invalid field."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(ServiceError):
    """Raised when a required credential or environment value is absent."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFoundError(ServiceError):
    """Raised when a vendor resource could not be located."""

    status_code = status.HTTP_404_NOT_FOUND


# Vendor statuses passed through unchanged; anything else becomes a 500.
_PASSTHROUGH_STATUSES = frozenset(
    {
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_429_TOO_MANY_REQUESTS,
    }
)


class UpstreamError(ServiceError):
    """Raised when a vendor answers with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        vendor_status: int | None = None,
        details: str | None = None,
        suggestion: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if status_code is None:
            status_code = (
                vendor_status
                if vendor_status in _PASSTHROUGH_STATUSES
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        super().__init__(
            message, details=details, suggestion=suggestion, status_code=status_code
        )
        self.vendor_status = vendor_status


class VendorTimeoutError(ServiceError):
    """Raised when an explicit vendor timeout elapses."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, vendor: str, *, timeout_seconds: float | None = None) -> None:
        window = f" within {timeout_seconds:g}s" if timeout_seconds else ""
        super().__init__(
            "Request timeout",
            details=f"The {vendor} service did not respond{window}.",
            suggestion="Try again in a moment; the request was not retried automatically.",
        )
        self.vendor = vendor
