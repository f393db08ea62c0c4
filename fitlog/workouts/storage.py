# -*- coding: utf-8 -*-
"""Workout plan storage helpers (SQLite)."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn, iso_utc
from ..config import settings


def _as_list(value: Optional[str]) -> List[str]:
    return [value] if value else []


def _loads_list(raw: Optional[str]) -> List[str]:
    try:
        value = json.loads(raw or "[]")
    except ValueError:
        return []
    return [str(v) for v in value] if isinstance(value, list) else []


def _row_to_exercise(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "exercise_id": row["exercise_id"],
        "name": row["name"],
        "body_parts": _loads_list(row.get("body_parts_json")),
        "target_muscles": _loads_list(row.get("target_muscles_json")),
        "equipments": _loads_list(row.get("equipments_json")),
        "difficulty": row.get("difficulty") or "unknown",
        "position": row.get("position") or 0,
    }


def create_plan(*, user_id: str, name: str, exercises: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Insert a plan and its exercises in one transaction, keeping exercise order."""
    plan_id = str(uuid4())
    now = iso_utc()
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO plans (id, user_id, name, created_at) VALUES (?, ?, ?, ?)",
            (plan_id, user_id, name, now),
        )
        conn.executemany(
            """
            INSERT INTO plan_exercises (
                id, plan_id, exercise_id, name, body_parts_json, target_muscles_json,
                equipments_json, difficulty, position
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    str(uuid4()),
                    plan_id,
                    ex["exercise_id"],
                    ex["name"],
                    json.dumps(_as_list(ex.get("body_part")), ensure_ascii=False),
                    json.dumps(_as_list(ex.get("target")), ensure_ascii=False),
                    json.dumps(_as_list(ex.get("equipment")), ensure_ascii=False),
                    ex.get("difficulty") or "unknown",
                    position,
                )
                for position, ex in enumerate(exercises)
            ],
        )
    return {
        "id": plan_id,
        "name": name,
        "created_at": now,
        "exercise_count": len(exercises),
        "exercises": [
            {
                "exercise_id": ex["exercise_id"],
                "name": ex["name"],
                "body_parts": _as_list(ex.get("body_part")),
                "target_muscles": _as_list(ex.get("target")),
                "equipments": _as_list(ex.get("equipment")),
                "difficulty": ex.get("difficulty") or "unknown",
                "position": position,
            }
            for position, ex in enumerate(exercises)
        ],
    }


def list_plans(*, user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            """
            SELECT p.id, p.name, p.created_at, COUNT(e.id) AS exercise_count
            FROM plans p
            LEFT JOIN plan_exercises e ON e.plan_id = p.id
            WHERE p.user_id = ?
            GROUP BY p.id
            ORDER BY p.created_at DESC
            """,
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]


def get_plan(*, user_id: str, plan_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(
            "SELECT id, name, created_at FROM plans WHERE id = ? AND user_id = ?",
            (plan_id, user_id),
        ).fetchone()
        if not row:
            return None
        exercises = conn.execute(
            "SELECT * FROM plan_exercises WHERE plan_id = ? ORDER BY position ASC",
            (plan_id,),
        ).fetchall()
    plan = dict(row)
    plan["exercises"] = [_row_to_exercise(dict(e)) for e in exercises]
    plan["exercise_count"] = len(plan["exercises"])
    return plan


def delete_plan(*, user_id: str, plan_id: str) -> bool:
    with db_conn(settings.db_path) as conn:
        cur = conn.execute("DELETE FROM plans WHERE id = ? AND user_id = ?", (plan_id, user_id))
        return cur.rowcount > 0
