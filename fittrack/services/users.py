"""User accounts: registration, credentials and profile updates."""

from typing import Any, Optional

from sqlalchemy.orm import Session

from fittrack.core.exceptions import (
    AuthenticationError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from fittrack.core.logging import get_logger
from fittrack.core.security import get_password_hash, verify_password
from fittrack.models import User
from fittrack.services.store import store_errors

logger = get_logger(__name__)


class UserService:
    """Service for user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User:
        with store_errors(self.db, "User"):
            user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        with store_errors(self.db, "User"):
            return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def register(self, name: str, email: str, password: str) -> User:
        """Create an account; emails are unique case-insensitively."""
        email = email.strip().lower()
        if self.find_by_email(email):
            raise DuplicateKeyError("User", message="User with this email already exists")

        user = User(name=name.strip(), email=email, password_hash=get_password_hash(password))
        with store_errors(self.db, "User"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)

        logger.info("user_registered", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    def update_profile(self, user_id: int, changes: dict[str, Any]) -> User:
        """Apply a partial profile update.

        ``changes`` uses column names; a nested ``fitness_goals`` dict is
        flattened onto the goal columns.
        """
        user = self.get(user_id)
        goals = changes.pop("fitness_goals", None) or {}

        with store_errors(self.db, "User"):
            for key, value in changes.items():
                if key == "name" and value is not None:
                    value = value.strip()
                setattr(user, key, value)
            for key, value in goals.items():
                if value is not None:
                    setattr(user, key, value)
            self.db.commit()
            self.db.refresh(user)

        logger.info("profile_updated", user_id=user_id, fields=sorted(changes) + sorted(goals))
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.get(user_id)
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("currentPassword", "Current password is incorrect")

        with store_errors(self.db, "User"):
            user.password_hash = get_password_hash(new_password)
            self.db.commit()

        logger.info("password_changed", user_id=user_id)
