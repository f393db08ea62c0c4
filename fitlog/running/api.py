# -*- coding: utf-8 -*-
"""Running — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..nutrition.weekly import parse_timestamp
from ..profiles.storage import get_profile
from .models import RunCreateRequest, RunListResponse, RunSession, RunSummaryResponse
from .storage import create_run, list_runs, pace_s_per_km, summarize_runs

router = APIRouter(prefix="/api/runs", tags=["Running"])


@router.post("", response_model=RunSession, summary="Log a run")
def create_run_api(request: RunCreateRequest, user: dict = Depends(get_current_user)):
    started_at = parse_timestamp(request.started_at)
    if started_at is None:
        raise HTTPException(status_code=400, detail=f"Invalid started_at: {request.started_at}")
    profile = get_profile(user["id"]) or {}
    run = create_run(
        user["id"],
        started_at=started_at,
        duration_s=request.duration_s,
        distance_m=request.distance_m,
        calories_kcal=request.calories_kcal,
        notes=request.notes,
        weight_kg=profile.get("weight_kg"),
    )
    return RunSession.model_validate(run)


@router.get("", response_model=RunListResponse, summary="List runs, newest first")
def list_runs_api(
    start: str | None = Query(default=None, description="YYYY-MM-DD"),
    end: str | None = Query(default=None, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    runs = list_runs(user["id"], start=start, end=end)
    return RunListResponse(count=len(runs), runs=[RunSession.model_validate(r) for r in runs])


@router.get("/summary", response_model=RunSummaryResponse, summary="Daily running summary")
def run_summary_api(
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    days, warnings = summarize_runs(user["id"], start=start, end=end)
    distance = sum(d.distance_m for d in days)
    duration = sum(d.duration_s for d in days)
    return RunSummaryResponse(
        start=start,
        end=end,
        distance_m=round(distance, 1),
        duration_s=round(duration, 1),
        run_count=sum(d.run_count for d in days),
        avg_pace_s_per_km=pace_s_per_km(duration, distance),
        days=days,
        warnings=warnings,
    )
