# -*- coding: utf-8 -*-
"""Nutrition domain — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class MealStats(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    other: float = 0.0


class MacroCalories(BaseModel):
    protein_kcal: float = 0.0
    carbs_kcal: float = 0.0
    fat_kcal: float = 0.0
    other_kcal: float = 0.0


class DayStats(BaseModel):
    label: str
    date: str = Field(..., description="YYYY-MM-DD")
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    other: float = 0.0
    entry_count: int = Field(0, ge=0)
    meals: Dict[str, MealStats] = Field(default_factory=dict)
    macro_calories: MacroCalories = Field(default_factory=MacroCalories)


class WeeklyStatsResponse(BaseModel):
    week_start: str
    week_end: str
    timezone: str
    day_labels: List[str]
    selected_day_index: int = Field(..., ge=0, le=6)
    has_data: bool
    streak: int = Field(0, ge=0, le=7)
    days: List[DayStats]


GoalSource = Literal["default", "profile", "computed"]


class CalorieGoals(BaseModel):
    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int
    source: GoalSource = "default"
    bmr: Optional[float] = None
    tdee: Optional[float] = None


class DashboardResponse(BaseModel):
    date: str
    day_index: int = Field(..., ge=0, le=6)
    goals: CalorieGoals
    consumed: float
    remaining: float
    protein_deficit: float
    progress: float = Field(..., ge=0, le=1)
    over_goal: bool
    streak: int = Field(0, ge=0, le=7)
    has_data: bool
    suggestion: str
    goal: str
    goal_message: str
    day: DayStats


class ScoreRequest(BaseModel):
    calories: float = Field(..., ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    ultra_processed: bool = False


class ScoreResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    other_calories: float
    macro_calories: float
