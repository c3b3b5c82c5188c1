from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_picture = Column(String(512), default="")

    # Biometrics
    height = Column(Float)  # cm
    weight = Column(Float)  # kg
    age = Column(Integer)
    gender = Column(String(20), default="other")
    activity_level = Column(String(30), default="moderately_active")

    # Fitness goals
    daily_steps = Column(Integer, default=10000)
    daily_calories = Column(Integer, default=2000)
    daily_water = Column(Integer, default=8)  # glasses
    weekly_workouts = Column(Integer, default=3)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    workouts = relationship("Workout", back_populates="user", cascade="all, delete-orphan")
    nutrition_entries = relationship(
        "NutritionEntry", back_populates="user", cascade="all, delete-orphan"
    )
    water_intake = relationship("WaterIntake", back_populates="user", cascade="all, delete-orphan")

    @property
    def fitness_goals(self) -> dict:
        return {
            "dailySteps": self.daily_steps,
            "dailyCalories": self.daily_calories,
            "dailyWater": self.daily_water,
            "weeklyWorkouts": self.weekly_workouts,
        }


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.now)
    type = Column(String(30), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    calories_burned = Column(Float, nullable=False, default=0)
    intensity = Column(String(20), nullable=False, default="moderate")
    description = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="workouts")

    __table_args__ = (Index("ix_workouts_user_date", "user_id", "date"),)


class NutritionEntry(Base):
    __tablename__ = "nutrition_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.now)
    food_item = Column(String(100), nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False)
    carbs = Column(Float, nullable=False)
    fats = Column(Float, nullable=False)
    meal_type = Column(String(20), nullable=False)
    serving_size = Column(String(50))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="nutrition_entries")

    __table_args__ = (Index("ix_nutrition_entries_user_date", "user_id", "date"),)


class WaterIntake(Base):
    __tablename__ = "water_intake"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(DateTime, nullable=False)  # always local midnight
    glasses = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)  # ml
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="water_intake")

    # One record per user per day
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_water_intake_user_day"),)
