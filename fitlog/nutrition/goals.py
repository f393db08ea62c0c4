# -*- coding: utf-8 -*-
"""Daily calorie and macro goals derived from a profile."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .bmr import calculate_bmr, calculate_tdee
from .macros import calculate_macro_goals, round_half_up
from .models import CalorieGoals

DEFAULT_GOALS = CalorieGoals(
    calorie_goal=2000,
    protein_goal=150,
    carbs_goal=200,
    fat_goal=70,
    source="default",
)

# Stand-ins for profile fields the user skipped during onboarding.
DEFAULT_AGE = 26
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 170.0
DEFAULT_GENDER = "other"
DEFAULT_ACTIVITY = "moderate"


def _pick(profile: Dict[str, Any], key: str, default: Any) -> Any:
    value = profile.get(key)
    return default if value is None else value


def resolve_calorie_goals(profile: Optional[Dict[str, Any]]) -> CalorieGoals:
    """Return the user's goals: explicit profile values first, then TDEE-derived ones.

    A stored calorie goal of 0 counts as unset. Macro goals are filled in
    individually, so a profile may override protein only and keep the split
    for carbs and fat.
    """
    if not profile:
        return DEFAULT_GOALS.model_copy()

    bmr: Optional[float] = None
    tdee: Optional[float] = None
    stored = profile.get("calorie_goal")
    if stored:
        calorie_goal = int(stored)
        source = "profile"
    else:
        inputs = dict(
            age=float(_pick(profile, "age", DEFAULT_AGE)),
            weight_kg=float(_pick(profile, "weight_kg", DEFAULT_WEIGHT_KG)),
            height_cm=float(_pick(profile, "height_cm", DEFAULT_HEIGHT_CM)),
            gender=str(_pick(profile, "gender", DEFAULT_GENDER)),
        )
        bmr = round(calculate_bmr(**inputs), 1)
        tdee_raw = calculate_tdee(activity_level=_pick(profile, "activity_level", DEFAULT_ACTIVITY), **inputs)
        tdee = round(tdee_raw, 1)
        calorie_goal = round_half_up(tdee_raw)
        source = "computed"

    split = calculate_macro_goals(calorie_goal)
    return CalorieGoals(
        calorie_goal=calorie_goal,
        protein_goal=int(_pick(profile, "protein_goal", split["protein_g"])),
        carbs_goal=int(_pick(profile, "carbs_goal", split["carbs_g"])),
        fat_goal=int(_pick(profile, "fat_goal", split["fat_g"])),
        source=source,
        bmr=bmr,
        tdee=tdee,
    )
