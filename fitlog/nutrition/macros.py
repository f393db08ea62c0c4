# -*- coding: utf-8 -*-
"""Macro split and calorie arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class MacroSplit:
    """Share of calories allocated to each macro; shares sum to 1."""

    protein_pct: float
    carbs_pct: float
    fat_pct: float

    def __post_init__(self) -> None:
        for name in ("protein_pct", "carbs_pct", "fat_pct"):
            value = getattr(self, name)
            if value < 0 or value > 1:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        total = self.protein_pct + self.carbs_pct + self.fat_pct
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"macro split must sum to 1.0, got {total:.3f}")


DEFAULT_MACRO_SPLIT = MacroSplit(protein_pct=0.3, carbs_pct=0.4, fat_pct=0.3)


def calculate_macro_goals(calories: float, split: MacroSplit = DEFAULT_MACRO_SPLIT) -> Dict[str, int]:
    protein_calories = calories * split.protein_pct
    carbs_calories = calories * split.carbs_pct
    fat_calories = calories * split.fat_pct
    return {
        "protein_g": round_half_up(protein_calories / KCAL_PER_G_PROTEIN),
        "carbs_g": round_half_up(carbs_calories / KCAL_PER_G_CARBS),
        "fat_g": round_half_up(fat_calories / KCAL_PER_G_FAT),
    }


def macro_calories(protein: float, carbs: float, fat: float) -> float:
    return protein * KCAL_PER_G_PROTEIN + carbs * KCAL_PER_G_CARBS + fat * KCAL_PER_G_FAT


def calculate_other_calories(total_calories: float, protein: float, carbs: float, fat: float) -> float:
    """Calories not explained by protein/carbs/fat (alcohol, fibre, estimation slack)."""
    return max(0.0, total_calories - macro_calories(protein, carbs, fat))
