# -*- coding: utf-8 -*-
"""Profiles — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Gender = Literal["Male", "Female", "Other", "Prefer not to say"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
GoalType = Literal["Lose", "Maintain", "Gain"]


class ProfileUpsertRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=120)
    age: Optional[int] = Field(None, ge=1, le=120)
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[GoalType] = None
    calorie_goal: Optional[int] = Field(None, ge=0, le=20000)
    protein_goal: Optional[int] = Field(None, ge=0, le=2000)
    carbs_goal: Optional[int] = Field(None, ge=0, le=2000)
    fat_goal: Optional[int] = Field(None, ge=0, le=2000)

    @field_validator("display_name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value


class Profile(BaseModel):
    id: str
    display_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    activity_level: Optional[str] = None
    goal: Optional[str] = None
    calorie_goal: Optional[int] = None
    protein_goal: Optional[int] = None
    carbs_goal: Optional[int] = None
    fat_goal: Optional[int] = None
    updated_at: str


class ProfileMetrics(BaseModel):
    bmi: Optional[float] = None
    bmi_category: Optional[str] = None
    bmr: Optional[float] = None
    tdee: Optional[float] = None
    missing: List[str] = Field(default_factory=list)
