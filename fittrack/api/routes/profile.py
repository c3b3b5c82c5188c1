"""Profile endpoints: biometrics, goals, derived health metrics, password."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fittrack.api.deps import get_current_user
from fittrack.api.schemas import PasswordChange, ProfileUpdate, UserOut, envelope, serialize
from fittrack.database import get_db
from fittrack.models import User
from fittrack.services.health_metrics import profile_health_metrics
from fittrack.services.users import UserService

router = APIRouter()


@router.put("")
async def update_profile(
    body: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update name, biometrics, activity level and fitness goals."""
    user = UserService(db).update_profile(current_user.id, body.changes())
    return envelope(serialize(UserOut, user), "Profile updated successfully")


@router.get("/stats")
async def profile_stats(current_user: User = Depends(get_current_user)):
    """BMI, BMI category, BMR and TDEE from the stored profile; null when unavailable."""
    return envelope(profile_health_metrics(current_user))


@router.put("/password")
async def change_password(
    body: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    UserService(db).change_password(current_user.id, body.current_password, body.new_password)
    return envelope(message="Password updated successfully")
