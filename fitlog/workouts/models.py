# -*- coding: utf-8 -*-
"""Workout plans — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PlanExerciseIn(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    body_part: Optional[str] = None
    target: Optional[str] = None
    equipment: Optional[str] = None
    difficulty: Optional[str] = None


class PlanCreateRequest(BaseModel):
    name: str = Field("My Plan", max_length=120)
    exercises: List[PlanExerciseIn] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "My Plan"
        return value.strip() if isinstance(value, str) else value


class PlanExercise(BaseModel):
    exercise_id: str
    name: str
    body_parts: List[str] = Field(default_factory=list)
    target_muscles: List[str] = Field(default_factory=list)
    equipments: List[str] = Field(default_factory=list)
    difficulty: str = "unknown"
    position: int = 0


class PlanSummary(BaseModel):
    id: str
    name: str
    created_at: str
    exercise_count: int = 0


class PlanDetail(PlanSummary):
    exercises: List[PlanExercise] = Field(default_factory=list)


class PlanListResponse(BaseModel):
    items: List[PlanSummary]
