# -*- coding: utf-8 -*-
"""
Energy expenditure calculators

BMR via Mifflin-St Jeor, TDEE via activity multipliers, and BMI.
"""

from __future__ import annotations

from typing import Dict, Optional

ACTIVITY_MULTIPLIER: Dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

_FALLBACK_MULTIPLIER = 1.2


def _sex_constant(gender: Optional[str]) -> float:
    g = (gender or "").strip().lower()
    if g == "male":
        return 5
    if g == "female":
        return -161
    # Midpoint for other / undisclosed.
    return -78


def calculate_bmr(*, age: float, weight_kg: float, height_cm: float, gender: Optional[str]) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + _sex_constant(gender)


def activity_multiplier(activity_level: Optional[str]) -> float:
    return ACTIVITY_MULTIPLIER.get(activity_level or "sedentary", _FALLBACK_MULTIPLIER)


def calculate_tdee(
    *,
    age: float,
    weight_kg: float,
    height_cm: float,
    gender: Optional[str],
    activity_level: Optional[str] = None,
) -> float:
    """
    Total daily energy expenditure.

    Args:
        activity_level: one of ACTIVITY_MULTIPLIER keys; None means sedentary,
            unknown values fall back to the sedentary multiplier.

    Returns:
        BMR multiplied by the activity factor (kcal/day, unrounded).
    """
    bmr = calculate_bmr(age=age, weight_kg=weight_kg, height_cm=height_cm, gender=gender)
    return bmr * activity_multiplier(activity_level)


def calculate_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
        return None
    height_m = height_cm / 100.0
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: Optional[float]) -> Optional[str]:
    if bmi is None:
        return None
    if bmi < 18.5:
        return "underweight"
    if bmi < 25:
        return "normal"
    if bmi < 30:
        return "overweight"
    return "obese"
