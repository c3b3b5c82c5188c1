from fittrack.core.exceptions import (
    AuthenticationError,
    DuplicateKeyError,
    FitTrackException,
    NotFoundError,
    RateLimitError,
    StoreUnavailableError,
    ValidationError,
)

__all__ = [
    "FitTrackException",
    "NotFoundError",
    "ValidationError",
    "StoreUnavailableError",
    "DuplicateKeyError",
    "AuthenticationError",
    "RateLimitError",
]
