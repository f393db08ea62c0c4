# -*- coding: utf-8 -*-
"""Auth — user rows."""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn, iso_utc
from ..config import settings


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _fetch_user(where: str, value: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(f"SELECT id, email, password_hash, created_at FROM users WHERE {where} = ?", (value,)).fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    return _fetch_user("email", normalize_email(email))


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    return _fetch_user("id", user_id)


def create_user(*, email: str, password_hash: str) -> Dict[str, Any]:
    user = {
        "id": str(uuid4()),
        "email": normalize_email(email),
        "password_hash": password_hash,
        "created_at": iso_utc(),
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO users (id, email, password_hash, created_at) VALUES (:id, :email, :password_hash, :created_at)",
            user,
        )
    return user
