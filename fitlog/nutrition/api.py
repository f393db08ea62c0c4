# -*- coding: utf-8 -*-
"""Nutrition domain — API endpoints (goals, weekly stats, dashboard, scoring)."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..config import settings
from ..food_logs.storage import list_food_logs_between
from ..profiles.storage import get_profile
from .dashboard import build_dashboard
from .goals import resolve_calorie_goals
from .macros import calculate_other_calories, macro_calories
from .models import CalorieGoals, DashboardResponse, DayStats, ScoreRequest, ScoreResponse, WeeklyStatsResponse
from .score import calculate_nutrition_score
from .weekly import WEEK_DAYS, aggregate_week, has_data, logging_streak, resolve_tz, to_monday_index, week_bounds

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])


def _tz_or_400(name: Optional[str]) -> Tuple[tzinfo, str]:
    tz_name = (name or settings.default_tz).strip() or "UTC"
    try:
        return resolve_tz(tz_name), tz_name
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _date_or_400(value: Optional[str], tz: tzinfo) -> date:
    if not value:
        return datetime.now(tz).date()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}") from exc


def _load_week(user_id: str, reference: date, tz: tzinfo) -> Tuple[List[DayStats], datetime, datetime, int]:
    try:
        start, end = week_bounds(reference, tz)
        rows = list_food_logs_between(user_id, start, end)
    except OverflowError as exc:
        # The week (or its UTC conversion) falls outside the datetime range.
        raise HTTPException(status_code=400, detail=f"Invalid date: {reference.isoformat()}") from exc
    days = aggregate_week(rows, tz=tz, week_start=start.date())
    today = datetime.now(tz).date()
    # Past weeks count the streak back from Sunday.
    streak_anchor = to_monday_index(today) if start.date() <= today < end.date() else len(WEEK_DAYS) - 1
    return days, start, end, streak_anchor


@router.get("/goals", response_model=CalorieGoals, summary="Daily calorie and macro goals")
def nutrition_goals(user: dict = Depends(get_current_user)):
    return resolve_calorie_goals(get_profile(user["id"]))


@router.get("/weekly", response_model=WeeklyStatsResponse, summary="Monday-indexed weekly nutrition stats")
def weekly_stats(
    date_: str | None = Query(default=None, alias="date", description="Any YYYY-MM-DD inside the week"),
    tz: str | None = Query(default=None, description="IANA timezone, e.g. Europe/Berlin"),
    user: dict = Depends(get_current_user),
):
    tzinfo_, tz_name = _tz_or_400(tz)
    reference = _date_or_400(date_, tzinfo_)
    days, start, end, streak_anchor = _load_week(user["id"], reference, tzinfo_)
    return WeeklyStatsResponse(
        week_start=start.isoformat(),
        week_end=end.isoformat(),
        timezone=tz_name,
        day_labels=list(WEEK_DAYS),
        selected_day_index=to_monday_index(reference),
        has_data=has_data(days),
        streak=logging_streak(days, streak_anchor),
        days=days,
    )


@router.get("/dashboard", response_model=DashboardResponse, summary="Goal progress for one day")
def dashboard(
    date_: str | None = Query(default=None, alias="date", description="YYYY-MM-DD; defaults to today"),
    tz: str | None = Query(default=None, description="IANA timezone"),
    day: int | None = Query(default=None, ge=0, le=6, description="Monday-based day index within the week"),
    user: dict = Depends(get_current_user),
):
    tzinfo_, _ = _tz_or_400(tz)
    reference = _date_or_400(date_, tzinfo_)
    days, _, _, streak_anchor = _load_week(user["id"], reference, tzinfo_)
    profile = get_profile(user["id"])
    return build_dashboard(
        days,
        resolve_calorie_goals(profile),
        day_index=to_monday_index(reference) if day is None else day,
        today_index=streak_anchor,
        goal=(profile or {}).get("goal"),
    )


@router.post("/score", response_model=ScoreResponse, summary="Score a meal's macros")
def score_meal(request: ScoreRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    return ScoreResponse(
        score=calculate_nutrition_score(
            calories=request.calories,
            protein_g=request.protein_g,
            carbs_g=request.carbs_g,
            fat_g=request.fat_g,
            ultra_processed=request.ultra_processed,
        ),
        other_calories=round(
            calculate_other_calories(request.calories, request.protein_g, request.carbs_g, request.fat_g), 1
        ),
        macro_calories=round(macro_calories(request.protein_g, request.carbs_g, request.fat_g), 1),
    )
