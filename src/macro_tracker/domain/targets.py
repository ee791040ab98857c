"""Daily energy expenditure and macro target calculations.

This module is shared by the profile service and the targets preview
endpoint, so both always produce identical numbers. It has no I/O and no
third-party imports.
"""

import math
from dataclasses import dataclass
from enum import StrEnum

KG_PER_LB = 0.453592
CM_PER_INCH = 2.54

MALE_SEX_TERM = 5.0
FEMALE_SEX_TERM = -161.0

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_CALORIE_ADJUSTMENTS: dict[str, int] = {
    "maintain": 0,
    "lose": -500,
    "gain": 300,
}

PROTEIN_G_PER_LB = 0.9
FAT_CALORIE_SHARE = 0.28
KCAL_PER_G_FAT = 9
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class DietPlan(StrEnum):
    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"


class OtherGenderPolicy(StrEnum):
    """Which BMR sex term applies to ``gender == "other"``."""

    FEMALE = "female"
    MALE = "male"
    AVERAGE = "average"


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macro targets, grams for macros."""

    calories: int
    protein: int
    carbs: int
    fat: int


def compute_tdee(  # noqa: PLR0913
    gender: str,
    age: float,
    height_inches: float,
    weight_lbs: float,
    activity_level: str,
    other_policy: OtherGenderPolicy = OtherGenderPolicy.FEMALE,
) -> int:
    """Return total daily energy expenditure in kcal (Mifflin-St Jeor)."""
    weight_kg = weight_lbs * KG_PER_LB
    height_cm = height_inches * CM_PER_INCH
    bmr = (
        10 * weight_kg
        + 6.25 * height_cm
        - 5 * age
        + _sex_term(Gender(gender), OtherGenderPolicy(other_policy))
    )
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)])


def compute_macro_targets(tdee: int, goal: str, weight_lbs: float) -> MacroTargets:
    """Split a goal-adjusted calorie budget into protein, fat and carbs.

    Carbs take whatever calories remain after protein and the unrounded fat
    share, so they can go negative for very low budgets.
    """
    calories = tdee + GOAL_CALORIE_ADJUSTMENTS[DietPlan(goal)]
    protein = round_half_up(weight_lbs * PROTEIN_G_PER_LB)
    fat_calories = calories * FAT_CALORIE_SHARE
    fat = round_half_up(fat_calories / KCAL_PER_G_FAT)
    carb_calories = calories - protein * KCAL_PER_G_PROTEIN - fat_calories
    carbs = round_half_up(carb_calories / KCAL_PER_G_CARBS)
    return MacroTargets(
        calories=round_half_up(calories),
        protein=protein,
        carbs=carbs,
        fat=fat,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going towards +infinity."""
    return math.floor(value + 0.5)


def _sex_term(gender: Gender, other_policy: OtherGenderPolicy) -> float:
    if gender is Gender.MALE:
        return MALE_SEX_TERM
    if gender is Gender.FEMALE:
        return FEMALE_SEX_TERM
    if other_policy is OtherGenderPolicy.MALE:
        return MALE_SEX_TERM
    if other_policy is OtherGenderPolicy.AVERAGE:
        return (MALE_SEX_TERM + FEMALE_SEX_TERM) / 2
    return FEMALE_SEX_TERM
