# -*- coding: utf-8 -*-
"""Profiles — DB storage helpers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..app_db import db_conn, iso_utc
from ..config import settings

PROFILE_FIELDS = (
    "display_name",
    "age",
    "gender",
    "height_cm",
    "weight_kg",
    "activity_level",
    "goal",
    "calorie_goal",
    "protein_goal",
    "carbs_goal",
    "fat_goal",
)


def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def upsert_profile(user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Insert or update a profile; only keys present in ``fields`` are written on update."""
    values = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
    now = iso_utc()
    with db_conn(settings.db_path) as conn:
        existing = conn.execute("SELECT id FROM profiles WHERE id = ?", (user_id,)).fetchone()
        if existing:
            assignments = ", ".join(f"{k} = ?" for k in values)
            params = list(values.values())
            sql = "UPDATE profiles SET updated_at = ?" + (f", {assignments}" if assignments else "") + " WHERE id = ?"
            conn.execute(sql, [now, *params, user_id])
        else:
            columns = ["id", "updated_at", *values.keys()]
            placeholders = ", ".join("?" for _ in columns)
            conn.execute(
                f"INSERT INTO profiles ({', '.join(columns)}) VALUES ({placeholders})",
                [user_id, now, *values.values()],
            )
        row = conn.execute("SELECT * FROM profiles WHERE id = ?", (user_id,)).fetchone()
    return dict(row)
