# -*- coding: utf-8 -*-
"""Food logs — API endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..nutrition.weekly import parse_timestamp
from .models import FoodLog, FoodLogCreateRequest, FoodLogListResponse
from .storage import count_food_logs, create_food_log, delete_food_log, list_food_logs

router = APIRouter(prefix="/api/food-logs", tags=["Food logs"])


def parse_created_at_or_400(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid created_at: {value}")
    return parsed


def _day_or_400(name: str, value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {value}") from exc


@router.post("", response_model=FoodLog, summary="Log a meal")
def create_log(request: FoodLogCreateRequest, user: dict = Depends(get_current_user)):
    created = create_food_log(
        user["id"],
        items=[i.model_dump(exclude_none=True) for i in request.items],
        total_calories=request.total_calories,
        protein_g=request.protein_g,
        carbs_g=request.carbs_g,
        fat_g=request.fat_g,
        meal_type=request.meal_type,
        source=request.source,
        corrected=request.corrected,
        ultra_processed=request.ultra_processed,
        image_url=request.image_url,
        created_at=parse_created_at_or_400(request.created_at),
    )
    return FoodLog.model_validate(created)


@router.get("", response_model=FoodLogListResponse, summary="List food logs")
def list_logs(
    start: str | None = Query(default=None, description="YYYY-MM-DD"),
    end: str | None = Query(default=None, description="YYYY-MM-DD"),
    meal_type: str | None = Query(default=None, description="Breakfast | Lunch | Brunch | Dinner | Snacks"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: dict = Depends(get_current_user),
):
    filters = dict(start=_day_or_400("start", start), end=_day_or_400("end", end), meal_type=meal_type)
    entries = list_food_logs(user["id"], limit=limit, offset=offset, **filters)
    return FoodLogListResponse(
        count=count_food_logs(user["id"], **filters),
        entries=[FoodLog.model_validate(e) for e in entries],
    )


@router.delete("/{log_id}", summary="Delete a food log")
def delete_log(log_id: str, user: dict = Depends(get_current_user)):
    if not delete_food_log(user["id"], log_id):
        raise HTTPException(status_code=404, detail="Food log not found")
    return {"status": "ok"}
