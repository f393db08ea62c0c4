# -*- coding: utf-8 -*-
"""
fitlog API

Food logging, weekly nutrition stats, calorie goals, workout plans and runs,
plus a relay to the remote AI service for chat, meal photo analysis and
exercise lookup.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .ai.api import router as ai_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .food_logs.api import router as food_logs_router
from .nutrition.api import router as nutrition_router
from .profiles.api import router as profiles_router
from .running.api import router as running_router
from .workouts.api import router as workouts_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="fitlog",
    description="Nutrition and fitness tracking backend",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.db_path)
    if not settings.ai_base_url:
        logger.warning("FITLOG_AI_BASE_URL is not set; chat, food analysis and exercise lookup will fail")


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(profiles_router)
app.include_router(food_logs_router)
app.include_router(nutrition_router)
app.include_router(ai_router)
app.include_router(workouts_router)
app.include_router(running_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}
