"""Target Calculations - Pure functions for the daily calorie target.

All functions are pure: same input always produces same output, no side effects.
BMR uses the Mifflin-St Jeor equation.
"""

import logging
import math
from datetime import date

from .models import ActivityLevel, Gender, NutritionStats, Profile


logger = logging.getLogger(__name__)

# Roughly 7700 kcal per kg of body mass
KCAL_PER_KG = 7700

DEFAULT_ACTIVITY_MULTIPLIER = 1.2

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHT.value: 1.375,
    ActivityLevel.MODERATE.value: 1.55,
    ActivityLevel.ACTIVE.value: 1.725,
    ActivityLevel.EXTRA.value: 1.9,
}

ACTIVITY_LABELS = {
    ActivityLevel.SEDENTARY.value: "Sedentary",
    ActivityLevel.LIGHT.value: "Lightly Active",
    ActivityLevel.MODERATE.value: "Moderately Active",
    ActivityLevel.ACTIVE.value: "Very Active",
    ActivityLevel.EXTRA.value: "Extra Active",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity.

    Display rounding for calories; Python's round() would round ties to even.
    """
    return math.floor(value + 0.5)


def activity_multiplier(level: str | None) -> float:
    """Look up the TDEE multiplier for an activity level (1.2 if unknown)."""
    return ACTIVITY_MULTIPLIERS.get(level, DEFAULT_ACTIVITY_MULTIPLIER)


def calculate_bmr(weight: float, height: float, age: int, gender: str) -> float:
    """Calculate basal metabolic rate (kcal/day).

    Args:
        weight: Body weight in kg
        height: Height in cm
        age: Age in years
        gender: "male" gets +5; any other value gets -161

    Returns:
        BMR in kcal/day
    """
    bmr = 10 * weight + 6.25 * height - 5 * age
    if gender == Gender.MALE.value:
        return bmr + 5
    return bmr - 161


def calculate_tdee(bmr: float, level: str | None) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * activity_multiplier(level)


def days_until(target_date: date, today: date) -> int:
    """Days left until the target date, never less than one.

    A past or same-day target is clamped to a one-day horizon.
    """
    return max(1, math.ceil((target_date - today).days))


def compute_targets(profile: Profile, today: date | None = None) -> NutritionStats | None:
    """Derive BMR, TDEE and the daily calorie target from a profile.

    The target spreads the remaining weight change evenly over the days
    left until the profile's target date.

    Args:
        profile: The user's profile
        today: Evaluation date (defaults to today)

    Returns:
        NutritionStats, or None if age, height, weight, start_date or
        target_date is missing
    """
    required = (profile.age, profile.height, profile.weight, profile.start_date, profile.target_date)
    if not all(required):
        logger.debug("Profile incomplete, skipping target calculation")
        return None

    if today is None:
        today = date.today()

    days_remaining = days_until(profile.target_date, today)
    bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.gender)
    tdee = calculate_tdee(bmr, profile.activity_level)

    target_weight = profile.target_weight if profile.target_weight is not None else profile.weight
    weight_diff = target_weight - profile.weight
    daily_adjustment = weight_diff * KCAL_PER_KG / days_remaining

    return NutritionStats(
        bmr=bmr,
        tdee=tdee,
        target_calories=round_half_up(tdee + daily_adjustment),
    )
