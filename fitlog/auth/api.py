# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..config import settings
from ..profiles.storage import get_profile
from .models import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .security import TOKEN_COOKIE_NAME, create_access_token, get_current_user, hash_password, verify_password
from .storage import create_user, get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

_SECONDS_PER_DAY = 24 * 60 * 60


def _public(user: dict) -> UserPublic:
    return UserPublic(
        id=user["id"],
        email=user["email"],
        created_at=user["created_at"],
        has_profile=get_profile(user["id"]) is not None,
    )


def _start_session(response: Response, user: dict) -> AuthResponse:
    """Issue a token, mirror it into the httponly cookie and build the auth payload."""
    token = create_access_token(user_id=user["id"], email=user["email"])
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=int(settings.token_ttl_days) * _SECONDS_PER_DAY,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return AuthResponse(user=_public(user), token=token)


@router.post("/register", response_model=AuthResponse, summary="Create an account")
def register(request: RegisterRequest, response: Response):
    if get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    user = create_user(email=request.email, password_hash=hash_password(request.password))
    logger.info("registered user %s", user["id"])
    return _start_session(response, user)


@router.post("/login", response_model=AuthResponse, summary="Sign in with email and password")
def login(request: LoginRequest, response: Response):
    user = get_user_by_email(request.email)
    if user is None or not verify_password(request.password, user["password_hash"]):
        logger.info("failed login for %s", request.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _start_session(response, user)


@router.post("/logout", summary="Clear the session cookie")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Current user")
def me(user: dict = Depends(get_current_user)):
    return _public(user)
