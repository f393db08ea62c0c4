# -*- coding: utf-8 -*-
"""Heuristic 0-100 meal score."""

from __future__ import annotations

from .macros import KCAL_PER_G_PROTEIN, round_half_up

_BASE_SCORE = 70
_MAX_PROTEIN_BONUS = 20
_ULTRA_PROCESSED_PENALTY = 15


def _calorie_density_penalty(calories: float) -> int:
    if calories > 900:
        return 15
    if calories > 700:
        return 8
    return 0


def calculate_nutrition_score(
    *,
    calories: float,
    protein_g: float,
    carbs_g: float = 0.0,
    fat_g: float = 0.0,
    ultra_processed: bool = False,
) -> int:
    """Score a meal: protein-dense meals earn a bonus, very large or ultra-processed meals lose points.

    carbs_g and fat_g are accepted for a uniform call signature; they do not
    affect the current heuristic.
    """
    protein_ratio = (protein_g * KCAL_PER_G_PROTEIN) / calories if calories else 0.0
    protein_bonus = min(_MAX_PROTEIN_BONUS, round_half_up(protein_ratio * 100))
    penalty = _calorie_density_penalty(calories)
    if ultra_processed:
        penalty += _ULTRA_PROCESSED_PENALTY
    base = _BASE_SCORE + protein_bonus - penalty
    return max(0, min(100, base))
