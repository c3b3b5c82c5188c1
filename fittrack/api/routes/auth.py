"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from fittrack.api.deps import get_current_user
from fittrack.api.schemas import LoginRequest, RegisterRequest, UserOut, envelope, serialize
from fittrack.config import get_settings
from fittrack.core.exceptions import AuthenticationError
from fittrack.core.logging import get_logger
from fittrack.core.rate_limit import limiter
from fittrack.core.security import create_access_token
from fittrack.database import get_db
from fittrack.models import User
from fittrack.services.users import UserService

router = APIRouter()
logger = get_logger(__name__)
settings = get_settings()


def _issue_token(response: Response, user: User) -> dict:
    """Create a token, set it as an httpOnly cookie and build the payload."""
    access_token = create_access_token(user.id)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=access_token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="strict",
        max_age=settings.jwt_expire_hours * 3600,
    )
    return {
        "user": serialize(UserOut, user),
        "accessToken": access_token,
        "tokenType": "bearer",
    }


@router.post("/register", status_code=201)
@limiter.limit("10/minute")
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    db: Session = Depends(get_db),
):
    """
    Register a new user and sign them in.

    Raises:
        DuplicateKeyError: If the email is already registered.
    """
    user = UserService(db).register(body.name, body.email, body.password)
    return envelope(_issue_token(response, user), "User registered successfully")


@router.post("/login")
@limiter.limit("10/minute")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Authenticate with email and password.

    Returns the user and a JWT, which is also set as an httpOnly cookie.

    Raises:
        AuthenticationError: If credentials are invalid.
    """
    try:
        user = UserService(db).authenticate(body.email, body.password)
    except AuthenticationError:
        logger.warning("login_failed", reason="invalid_credentials")
        raise

    logger.info("login_success", user_id=user.id)
    return envelope(_issue_token(response, user), "Login successful")


@router.post("/login/form")
async def login_form(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    OAuth2 password flow login (form data, ``username`` is the email).

    Used by the interactive API docs.
    """
    try:
        user = UserService(db).authenticate(form_data.username, form_data.password)
    except AuthenticationError:
        logger.warning("login_failed", reason="invalid_credentials")
        raise

    logger.info("login_success", user_id=user.id)
    payload = _issue_token(response, user)
    return {"access_token": payload["accessToken"], "token_type": "bearer"}


@router.post("/logout")
async def logout(response: Response):
    """Clear the auth cookie."""
    response.delete_cookie(settings.auth_cookie_name)
    return envelope(message="Logged out successfully")


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current authenticated user."""
    return envelope(serialize(UserOut, current_user))
