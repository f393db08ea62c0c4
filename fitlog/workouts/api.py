# -*- coding: utf-8 -*-
"""Workout plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .models import PlanCreateRequest, PlanDetail, PlanListResponse, PlanSummary
from .storage import create_plan, delete_plan, get_plan, list_plans

router = APIRouter(prefix="/api/plans", tags=["Plans"])


@router.post("", response_model=PlanDetail, summary="Save a workout plan")
def create_plan_api(request: PlanCreateRequest, user: dict = Depends(get_current_user)):
    if not request.exercises:
        raise HTTPException(status_code=400, detail="Add at least one exercise to your plan.")
    plan = create_plan(
        user_id=user["id"],
        name=request.name,
        exercises=[e.model_dump() for e in request.exercises],
    )
    return PlanDetail.model_validate(plan)


@router.get("", response_model=PlanListResponse, summary="List workout plans, newest first")
def list_plans_api(user: dict = Depends(get_current_user)):
    return PlanListResponse(items=[PlanSummary.model_validate(p) for p in list_plans(user_id=user["id"])])


@router.get("/{plan_id}", response_model=PlanDetail, summary="Get a workout plan")
def get_plan_api(plan_id: str, user: dict = Depends(get_current_user)):
    plan = get_plan(user_id=user["id"], plan_id=plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return PlanDetail.model_validate(plan)


@router.delete("/{plan_id}", summary="Delete a workout plan")
def delete_plan_api(plan_id: str, user: dict = Depends(get_current_user)):
    if not delete_plan(user_id=user["id"], plan_id=plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")
    return {"status": "ok"}
