"""Rate limiting configuration using SlowAPI."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from fittrack.config import get_settings
from fittrack.core.error_handlers import error_response
from fittrack.core.exceptions import RateLimitError

settings = get_settings()


def get_request_identifier(request: Request) -> str:
    """Get identifier for rate limiting.

    Uses IP address as the primary identifier.
    """
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_request_identifier,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    error = RateLimitError(
        f"Rate limit exceeded: {exc.detail}",
        retry_after=getattr(exc, "retry_after", None),
    )
    return error_response(error.status_code, error.code, error.message, error.details)
