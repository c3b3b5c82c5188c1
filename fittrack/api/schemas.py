"""Request and response models for the HTTP API.

JSON uses camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fittrack.core.clock import to_local_naive
from fittrack.core.enums import ActivityLevel, Gender, Intensity, MealType, WorkoutType

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"

# Client timestamps may carry an offset; storage is naive local time
LocalDateTime = Annotated[datetime, AfterValidator(to_local_naive)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, ready to apply to a record."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RecordOut(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def envelope(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    """Wrap a payload in the standard success envelope."""
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def serialize(schema: type[RecordOut], obj: Any) -> dict[str, Any]:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


# Auth

class RegisterRequest(ApiModel):
    name: str = Field(min_length=2, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=6)


class LoginRequest(ApiModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class UserOut(RecordOut):
    id: int
    name: str
    email: str
    profile_picture: Optional[str] = ""
    height: Optional[float] = None
    weight: Optional[float] = None
    age: Optional[int] = None
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    fitness_goals: dict[str, Optional[int]]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Profile

class FitnessGoalsUpdate(ApiModel):
    daily_steps: Optional[int] = Field(default=None, ge=1000, le=50000)
    daily_calories: Optional[int] = Field(default=None, ge=1000, le=5000)
    daily_water: Optional[int] = Field(default=None, ge=1, le=20)
    weekly_workouts: Optional[int] = Field(default=None, ge=1, le=7)


class ProfileUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    height: Optional[float] = Field(default=None, ge=100, le=250)
    weight: Optional[float] = Field(default=None, ge=30, le=300)
    age: Optional[int] = Field(default=None, ge=13, le=120)
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    profile_picture: Optional[str] = Field(default=None, max_length=512)
    fitness_goals: Optional[FitnessGoalsUpdate] = None


class PasswordChange(ApiModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


# Workouts

class WorkoutCreate(ApiModel):
    type: WorkoutType
    duration: int = Field(ge=1, le=480)
    calories_burned: float = Field(ge=0)
    intensity: Intensity = Field(default=Intensity.MODERATE, validate_default=True)
    description: Optional[str] = Field(default=None, max_length=500)
    date: Optional[LocalDateTime] = None


class WorkoutUpdate(ApiModel):
    type: Optional[WorkoutType] = None
    duration: Optional[int] = Field(default=None, ge=1, le=480)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    intensity: Optional[Intensity] = None
    description: Optional[str] = Field(default=None, max_length=500)
    date: Optional[LocalDateTime] = None


class WorkoutOut(RecordOut):
    id: int
    date: datetime
    type: WorkoutType
    duration: int
    calories_burned: float
    intensity: Intensity
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Nutrition

class NutritionCreate(ApiModel):
    food_item: str = Field(min_length=1, max_length=100)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    meal_type: MealType
    serving_size: Optional[str] = Field(default=None, max_length=50)
    date: Optional[LocalDateTime] = None


class NutritionUpdate(ApiModel):
    food_item: Optional[str] = Field(default=None, min_length=1, max_length=100)
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fats: Optional[float] = Field(default=None, ge=0)
    meal_type: Optional[MealType] = None
    serving_size: Optional[str] = Field(default=None, max_length=50)
    date: Optional[LocalDateTime] = None


class NutritionOut(RecordOut):
    id: int
    date: datetime
    food_item: str
    calories: float
    protein: float
    carbs: float
    fats: float
    meal_type: MealType
    serving_size: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Water

class WaterUpsert(ApiModel):
    glasses: int = Field(ge=0, le=50)
    amount: float = Field(ge=0, le=5000)
    date: Optional[LocalDateTime] = None


class WaterUpdate(ApiModel):
    glasses: Optional[int] = Field(default=None, ge=0, le=50)
    amount: Optional[float] = Field(default=None, ge=0, le=5000)


class QuickAdd(ApiModel):
    glasses: int = Field(ge=1, le=50)


class WaterOut(RecordOut):
    id: int
    date: datetime
    glasses: int
    amount: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
