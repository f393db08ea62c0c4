# -*- coding: utf-8 -*-
"""Auth — request authentication for routers and the app middleware."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from .passwords import hash_password, verify_password
from .storage import get_user_by_id
from .tokens import TokenError, issue_token, read_token

__all__ = [
    "TOKEN_COOKIE_NAME",
    "create_access_token",
    "get_current_user",
    "get_current_user_from_request",
    "hash_password",
    "verify_password",
]

TOKEN_COOKIE_NAME = "fitlog_token"


def create_access_token(*, user_id: str, email: str) -> str:
    return issue_token(user_id=user_id, email=email)


def get_token_from_request(request: Request) -> Optional[str]:
    """Bearer header wins over the session cookie."""
    scheme, _, value = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        claims = read_token(token)
    except TokenError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = get_user_by_id(str(claims["sub"]))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
