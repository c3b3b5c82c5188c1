"""
Sample data loader for local development.

Creates two demo accounts with a few days of workouts, meals and water
intake. With ``reset=True`` all existing rows are removed first.

Usage:
    python -m fittrack.services.seed
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from fittrack.core.clock import Clock, system_clock
from fittrack.core.logging import get_logger, setup_logging
from fittrack.models import NutritionEntry, User, WaterIntake, Workout
from fittrack.services.store import RecordStore, store_errors
from fittrack.services.users import UserService
from fittrack.services.water import WaterService

logger = get_logger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS = [
    {
        "name": "John Doe",
        "email": "john@example.com",
        "profile": {
            "height": 175,
            "weight": 70,
            "age": 28,
            "gender": "male",
            "activity_level": "moderately_active",
            "fitness_goals": {
                "daily_steps": 10000,
                "daily_calories": 2200,
                "daily_water": 8,
                "weekly_workouts": 4,
            },
        },
    },
    {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "profile": {
            "height": 165,
            "weight": 60,
            "age": 25,
            "gender": "female",
            "activity_level": "lightly_active",
            "fitness_goals": {
                "daily_steps": 8000,
                "daily_calories": 1800,
                "daily_water": 6,
                "weekly_workouts": 3,
            },
        },
    },
]

# (days ago, fields)
SAMPLE_WORKOUTS = [
    (1, {"type": "running", "duration": 30, "calories_burned": 300, "intensity": "high",
         "description": "Morning run in the park"}),
    (2, {"type": "strength_training", "duration": 45, "calories_burned": 250, "intensity": "moderate",
         "description": "Upper body workout"}),
    (3, {"type": "yoga", "duration": 60, "calories_burned": 150, "intensity": "low",
         "description": "Evening yoga session"}),
    (4, {"type": "cycling", "duration": 40, "calories_burned": 280, "intensity": "moderate",
         "description": "Bike ride around the city"}),
    (5, {"type": "hiit", "duration": 25, "calories_burned": 320, "intensity": "high",
         "description": "High-intensity interval training"}),
]

SAMPLE_NUTRITION = [
    (1, {"food_item": "Oatmeal with berries", "calories": 250, "protein": 8, "carbs": 45, "fats": 5,
         "meal_type": "breakfast", "serving_size": "1 cup"}),
    (1, {"food_item": "Grilled chicken salad", "calories": 350, "protein": 35, "carbs": 15, "fats": 12,
         "meal_type": "lunch", "serving_size": "1 large bowl"}),
    (1, {"food_item": "Salmon with vegetables", "calories": 400, "protein": 30, "carbs": 20, "fats": 18,
         "meal_type": "dinner", "serving_size": "1 fillet"}),
    (1, {"food_item": "Greek yogurt", "calories": 120, "protein": 15, "carbs": 8, "fats": 2,
         "meal_type": "snack", "serving_size": "1 cup"}),
    (2, {"food_item": "Banana", "calories": 105, "protein": 1, "carbs": 27, "fats": 0,
         "meal_type": "snack", "serving_size": "1 medium"}),
]

# (days ago, glasses, amount ml)
SAMPLE_WATER = [
    (1, 8, 2000),
    (2, 6, 1500),
    (3, 7, 1750),
    (4, 9, 2250),
    (5, 5, 1250),
]


def clear_data(db: Session) -> None:
    """Delete every row, children first."""
    with store_errors(db, "Seed"):
        for model in (WaterIntake, NutritionEntry, Workout, User):
            db.query(model).delete()
        db.commit()
    logger.info("seed_data_cleared")


def seed_database(db: Session, clock: Optional[Clock] = None, reset: bool = True) -> dict[str, int]:
    """
    Load the sample accounts and their history.

    Args:
        db: Database session
        clock: Clock that "days ago" offsets are taken from
        reset: Clear all tables before loading

    Returns:
        Number of rows created per table
    """
    clock = clock or system_clock
    now = clock.now()
    counts = {"users": 0, "workouts": 0, "nutrition_entries": 0, "water_intake": 0}

    if reset:
        clear_data(db)

    users = UserService(db)
    workouts = RecordStore(db, Workout)
    nutrition = RecordStore(db, NutritionEntry)
    water = WaterService(db, clock)

    for sample in SAMPLE_USERS:
        user = users.register(sample["name"], sample["email"], SAMPLE_PASSWORD)
        users.update_profile(user.id, dict(sample["profile"]))
        counts["users"] += 1

        for days_ago, fields in SAMPLE_WORKOUTS:
            workouts.insert(user.id, date=now - timedelta(days=days_ago), **fields)
            counts["workouts"] += 1

        for days_ago, fields in SAMPLE_NUTRITION:
            nutrition.insert(user.id, date=now - timedelta(days=days_ago), **fields)
            counts["nutrition_entries"] += 1

        for days_ago, glasses, amount in SAMPLE_WATER:
            water.upsert_day(user.id, glasses, amount, now - timedelta(days=days_ago))
            counts["water_intake"] += 1

        logger.info("seed_user_created", user_id=user.id, email=user.email)

    logger.info("seed_completed", **counts)
    return counts


def main() -> None:
    from fittrack.config import get_settings
    from fittrack.database import SessionLocal, init_db

    settings = get_settings()
    setup_logging(debug=settings.debug, log_level=settings.log_level)
    init_db()

    db = SessionLocal()
    try:
        counts = seed_database(db)
    finally:
        db.close()

    print(f"Seeded {counts}")
    print(f"Sample login: {SAMPLE_USERS[0]['email']} / {SAMPLE_PASSWORD}")


if __name__ == "__main__":
    main()
