"""Custom exception classes for FitTrack."""

from typing import Any, Optional


class FitTrackException(Exception):
    """Base exception for FitTrack."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(FitTrackException):
    """Resource not found, or not owned by the caller."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)},
        )


class ValidationError(FitTrackException):
    """Input validation error."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field},
        )


class StoreUnavailableError(FitTrackException):
    """The record store could not be reached or timed out."""

    def __init__(self, message: str = "Record store unavailable"):
        super().__init__(
            message=message,
            code="STORE_UNAVAILABLE",
            status_code=503,
        )


class DuplicateKeyError(FitTrackException):
    """A write collided with a uniqueness constraint."""

    def __init__(self, resource: str, message: str = "Duplicate key"):
        super().__init__(
            message=message,
            code="DUPLICATE_KEY",
            status_code=409,
            details={"resource": resource},
        )


class AuthenticationError(FitTrackException):
    """Authentication required or failed."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_ERROR",
            status_code=401,
        )


class RateLimitError(FitTrackException):
    """Rate limit exceeded error."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Any = None):
        super().__init__(
            message=message,
            code="RATE_LIMIT_ERROR",
            status_code=429,
            details={"retry_after": retry_after},
        )
