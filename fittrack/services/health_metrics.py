"""Derived body metrics computed from a user's biometric profile.

All functions are pure. Missing inputs yield None ("unavailable") rather
than zero or an error, so callers can render the value as absent.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

from fittrack.core.enums import ActivityLevel, BMICategory, Gender

# TDEE multipliers per activity level
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,          # Little to no exercise
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,   # Light exercise 1-3 days/week
    ActivityLevel.MODERATELY_ACTIVE: 1.55, # Moderate exercise 3-5 days/week
    ActivityLevel.VERY_ACTIVE: 1.725,      # Hard exercise 6-7 days/week
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,   # Physical job or twice-daily training
}


def round_half_up(value: float, places: int = 0) -> Union[int, float]:
    """Round with ties away from zero instead of Python's banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def calculate_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """
    Calculate Body Mass Index.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters

    Returns:
        BMI rounded to one decimal place, or None if either input is missing
    """
    if not weight_kg or not height_cm:
        return None
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m ** 2), 1)


def bmi_category(bmi: Optional[float]) -> Optional[BMICategory]:
    """Classify a BMI value; None when BMI is unavailable."""
    if bmi is None:
        return None
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def _mifflin_st_jeor(weight_kg: float, height_cm: float, age: int, offset: float) -> float:
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + offset


def calculate_bmr(
    weight_kg: Optional[float],
    height_cm: Optional[float],
    age: Optional[int],
    gender: Optional[Union[Gender, str]],
) -> Optional[int]:
    """
    Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Any gender other than male or female (including unset) uses the mean
    of the male and female equations.

    Returns:
        BMR in kcal/day rounded to the nearest integer, or None if weight,
        height or age is missing
    """
    if not weight_kg or not height_cm or not age:
        return None

    male = _mifflin_st_jeor(weight_kg, height_cm, age, 5)
    female = _mifflin_st_jeor(weight_kg, height_cm, age, -161)

    if gender == Gender.MALE:
        bmr = male
    elif gender == Gender.FEMALE:
        bmr = female
    else:
        bmr = (male + female) / 2

    return round_half_up(bmr)


def calculate_tdee(
    bmr: Optional[float],
    activity_level: Optional[Union[ActivityLevel, str]],
) -> Optional[int]:
    """
    Calculate Total Daily Energy Expenditure.

    Unknown or missing activity levels fall back to a multiplier of 1.0.

    Returns:
        TDEE in kcal/day rounded to the nearest integer, or None without a BMR
    """
    if bmr is None:
        return None

    try:
        level = ActivityLevel(activity_level) if activity_level else None
    except ValueError:
        level = None

    multiplier = ACTIVITY_MULTIPLIERS.get(level, 1.0)
    return round_half_up(bmr * multiplier)


def profile_health_metrics(user: Any) -> dict[str, Any]:
    """Derived metrics and goals for ``GET /profile/stats``."""
    bmi = calculate_bmi(user.weight, user.height)
    bmr = calculate_bmr(user.weight, user.height, user.age, user.gender)
    category = bmi_category(bmi)

    return {
        "bmi": bmi,
        "bmiCategory": category.value if category else None,
        "bmr": bmr,
        "tdee": calculate_tdee(bmr, user.activity_level),
        "fitnessGoals": user.fitness_goals,
    }
