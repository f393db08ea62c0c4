# -*- coding: utf-8 -*-
"""Running — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class RunCreateRequest(BaseModel):
    started_at: str = Field(..., description="ISO8601 timestamp")
    duration_s: float = Field(..., gt=0)
    distance_m: float = Field(..., ge=0)
    calories_kcal: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


class RunSession(BaseModel):
    id: str
    started_at: str
    duration_s: float
    distance_m: float
    calories_kcal: Optional[float] = None
    calories_estimated: bool = False
    notes: Optional[str] = None
    pace_s_per_km: Optional[float] = None
    speed_kmh: Optional[float] = None
    created_at: str


class RunListResponse(BaseModel):
    count: int
    runs: List[RunSession]


class RunDay(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    distance_m: float = Field(0.0, ge=0)
    duration_s: float = Field(0.0, ge=0)
    calories_kcal: float = Field(0.0, ge=0)
    run_count: int = Field(0, ge=0)


class RunSummaryResponse(BaseModel):
    start: str
    end: str
    distance_m: float = 0.0
    duration_s: float = 0.0
    run_count: int = 0
    avg_pace_s_per_km: Optional[float] = None
    days: List[RunDay]
    warnings: List[str] = Field(default_factory=list)
