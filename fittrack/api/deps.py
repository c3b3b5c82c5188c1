"""API dependencies for dependency injection."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.core.clock import Clock, get_clock
from fittrack.core.exceptions import AuthenticationError, NotFoundError
from fittrack.core.security import decode_token
from fittrack.database import get_db
from fittrack.models import User
from fittrack.services.metrics import MetricsEngine
from fittrack.services.users import UserService
from fittrack.services.water import WaterService

settings = get_settings()

# tokenUrl is the endpoint where tokens are obtained
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/auth/login/form",
    auto_error=False,  # Don't auto-raise, we handle it manually
)


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated user from a bearer token or the auth cookie.

    Raises:
        AuthenticationError: If not authenticated, the token is invalid, or
            the user no longer exists.
    """
    token = token or request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise AuthenticationError("Not authenticated")

    token_data = decode_token(token)
    try:
        return UserService(db).get(token_data.user_id)
    except NotFoundError:
        raise AuthenticationError("User not found")


def get_metrics_engine(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> MetricsEngine:
    return MetricsEngine(db, clock)


def get_water_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> WaterService:
    return WaterService(db, clock)
