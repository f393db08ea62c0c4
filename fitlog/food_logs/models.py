# -*- coding: utf-8 -*-
"""Food logs — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class FoodItem(BaseModel):
    name: str = Field(..., min_length=1, description="Food name, e.g. 'rice', 'apple'")
    portion: Optional[str] = Field(None, description="Human-readable portion, e.g. '1 bowl'")
    grams: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    confidence: Optional[float] = Field(None, ge=0, le=1)


class NutritionTotals(BaseModel):
    total_calories: float = Field(0.0, ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)


class FoodLogCreateRequest(BaseModel):
    items: List[FoodItem] = Field(default_factory=list)
    total_calories: Optional[float] = Field(None, ge=0)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    meal_type: str = Field("Breakfast", max_length=32)
    source: str = Field("manual", max_length=64)
    corrected: bool = False
    ultra_processed: bool = False
    image_url: Optional[str] = Field(None, max_length=2048)
    created_at: Optional[str] = Field(None, description="ISO8601 timestamp; defaults to now")


class FoodLog(BaseModel):
    id: str
    created_at: str
    meal_type: str
    source: str
    image_url: Optional[str] = None
    items: List[FoodItem] = Field(default_factory=list)
    total_calories: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    corrected: bool = False
    health_score: Optional[int] = None


class FoodLogListResponse(BaseModel):
    count: int
    entries: List[FoodLog]
