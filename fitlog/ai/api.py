# -*- coding: utf-8 -*-
"""AI relay — API endpoints (food analysis, chat, exercise lookup)."""

from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..config import settings
from ..food_logs.api import parse_created_at_or_400
from ..food_logs.models import FoodLog
from ..food_logs.storage import create_food_log
from .chat import send_chat
from .client import AiClient, get_ai_client
from .exercises import ExerciseLookupError, get_exercise, list_body_parts, list_exercises
from .food import FoodAnalysis, FoodAnalysisError, analyze_food
from .models import ChatRequest, ChatResponse, FoodAnalyzeAndLogRequest, FoodAnalyzeAndLogResponse, FoodAnalyzeRequest

router = APIRouter(tags=["AI"])


def _check_image_or_400(image_base64: str | None, max_bytes: int) -> None:
    if not image_base64:
        return
    raw = image_base64
    if raw.startswith("data:"):
        header, _, raw = raw.partition(",")
        if ";base64" not in header:
            raise HTTPException(status_code=400, detail="Image data URL must be base64 encoded")
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail=f"Image too large: {len(data)} bytes > {max_bytes}")


def _analyze_or_502(client: AiClient, request: FoodAnalyzeRequest) -> FoodAnalysis:
    _check_image_or_400(request.image_base64, settings.max_image_bytes)
    try:
        return analyze_food(client, image_base64=request.image_base64, image_url=request.image_url)
    except FoodAnalysisError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/api/food/analyze", response_model=FoodAnalysis, summary="Estimate nutrition from a meal photo")
def food_analyze(
    request: FoodAnalyzeRequest,
    user: dict = Depends(get_current_user),  # noqa: ARG001
    client: AiClient = Depends(get_ai_client),
):
    return _analyze_or_502(client, request)


@router.post(
    "/api/food/analyze-and-log",
    response_model=FoodAnalyzeAndLogResponse,
    summary="Analyze a meal photo and save it as a food log",
)
def food_analyze_and_log(
    request: FoodAnalyzeAndLogRequest,
    user: dict = Depends(get_current_user),
    client: AiClient = Depends(get_ai_client),
):
    created_at = parse_created_at_or_400(request.created_at)
    analysis = _analyze_or_502(client, request)
    created = create_food_log(
        user["id"],
        items=[i.model_dump(exclude_none=True) for i in analysis.items],
        total_calories=analysis.total_calories,
        protein_g=analysis.protein_g,
        carbs_g=analysis.carbs_g,
        fat_g=analysis.fat_g,
        meal_type=request.meal_type,
        source="ai",
        corrected=request.corrected,
        image_url=request.image_url,
        created_at=created_at,
    )
    return FoodAnalyzeAndLogResponse(log=FoodLog.model_validate(created), warnings=analysis.warnings)


@router.post("/api/chat", response_model=ChatResponse, summary="Chat with the nutrition assistant")
def chat(
    request: ChatRequest,
    user: dict = Depends(get_current_user),
    client: AiClient = Depends(get_ai_client),
):
    history = [turn.model_dump() for turn in request.history]
    return ChatResponse(**send_chat(client, message=request.message, history=history, user_id=user["id"]))


@router.get("/api/exercises", summary="List exercises, optionally by body part")
def exercises(
    body_part: str | None = Query(default=None, description="Body part filter; 'all' for no filter"),
    q: str | None = Query(default=None, max_length=100, description="Case-insensitive free-text search"),
    user: dict = Depends(get_current_user),  # noqa: ARG001
    client: AiClient = Depends(get_ai_client),
):
    try:
        return list_exercises(client, body_part, q)
    except ExerciseLookupError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/api/exercises/body-parts", summary="List body part filters")
def exercise_body_parts(
    user: dict = Depends(get_current_user),  # noqa: ARG001
    client: AiClient = Depends(get_ai_client),
):
    try:
        return list_body_parts(client)
    except ExerciseLookupError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/api/exercises/{exercise_id}", summary="Exercise detail")
def exercise_detail(
    exercise_id: str,
    user: dict = Depends(get_current_user),  # noqa: ARG001
    client: AiClient = Depends(get_ai_client),
):
    try:
        return get_exercise(client, exercise_id)
    except ExerciseLookupError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
