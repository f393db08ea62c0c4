# -*- coding: utf-8 -*-
"""Profiles — API endpoints (onboarding + body metrics)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from ..nutrition.bmr import bmi_category, calculate_bmi, calculate_bmr, calculate_tdee
from .models import Profile, ProfileMetrics, ProfileUpsertRequest
from .storage import get_profile, upsert_profile

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_ONBOARDING_FIELDS = ("display_name", "age", "gender")


@router.get("", response_model=Profile, summary="Get the current user's profile")
def read_profile(user: dict = Depends(get_current_user)):
    profile = get_profile(user["id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return Profile.model_validate(profile)


@router.put("", response_model=Profile, summary="Create or update the current user's profile")
def write_profile(request: ProfileUpsertRequest, user: dict = Depends(get_current_user)):
    fields = request.model_dump(exclude_unset=True)
    existing = get_profile(user["id"])
    merged = {**(existing or {}), **fields}
    if any(merged.get(k) in (None, "") for k in _ONBOARDING_FIELDS):
        raise HTTPException(status_code=400, detail="Please fill in all fields.")
    return Profile.model_validate(upsert_profile(user["id"], fields))


@router.get("/metrics", response_model=ProfileMetrics, summary="BMI / BMR / TDEE from the profile")
def profile_metrics(user: dict = Depends(get_current_user)):
    profile = get_profile(user["id"]) or {}
    missing = [k for k in ("age", "height_cm", "weight_kg") if profile.get(k) is None]
    bmi = calculate_bmi(profile.get("weight_kg"), profile.get("height_cm"))
    metrics = ProfileMetrics(bmi=bmi, bmi_category=bmi_category(bmi), missing=missing)
    if not missing:
        inputs = dict(
            age=float(profile["age"]),
            weight_kg=float(profile["weight_kg"]),
            height_cm=float(profile["height_cm"]),
            gender=profile.get("gender"),
        )
        metrics.bmr = round(calculate_bmr(**inputs), 1)
        metrics.tdee = round(calculate_tdee(activity_level=profile.get("activity_level"), **inputs), 1)
    return metrics
