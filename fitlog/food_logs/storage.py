# -*- coding: utf-8 -*-
"""Food logs — SQLite storage."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from ..app_db import db_conn, iso_utc
from ..config import settings
from ..nutrition.score import calculate_nutrition_score
from ..nutrition.weekly import normalize_meal_key
from .models import NutritionTotals

logger = logging.getLogger(__name__)


def compute_totals(items: List[Dict[str, Any]]) -> NutritionTotals:
    calories = 0.0
    protein = 0.0
    carbs = 0.0
    fat = 0.0
    for item in items:
        calories += float(item.get("calories") or 0.0)
        protein += float(item.get("protein_g") or 0.0)
        carbs += float(item.get("carbs_g") or 0.0)
        fat += float(item.get("fat_g") or 0.0)
    return NutritionTotals(
        total_calories=round(calories, 1),
        protein_g=round(protein, 1),
        carbs_g=round(carbs, 1),
        fat_g=round(fat, 1),
    )


def _row_to_log(row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        items = json.loads(row.get("items_json") or "[]")
    except ValueError:
        items = []
    return {
        "id": row["id"],
        "created_at": row["created_at"],
        "meal_type": row["meal_type"],
        "source": row["source"],
        "image_url": row.get("image_url"),
        "items": items if isinstance(items, list) else [],
        "total_calories": row.get("total_calories"),
        "protein_g": row.get("protein_g"),
        "carbs_g": row.get("carbs_g"),
        "fat_g": row.get("fat_g"),
        "corrected": bool(row.get("corrected")),
        "health_score": row.get("health_score"),
    }


def create_food_log(
    user_id: str,
    *,
    items: List[Dict[str, Any]],
    total_calories: Optional[float],
    protein_g: Optional[float],
    carbs_g: Optional[float],
    fat_g: Optional[float],
    meal_type: str,
    source: str,
    corrected: bool = False,
    ultra_processed: bool = False,
    image_url: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Persist a food log. Totals left as None are filled from the item sums."""
    summed = compute_totals(items)
    if total_calories is None:
        total_calories = summed.total_calories
    if protein_g is None:
        protein_g = summed.protein_g
    if carbs_g is None:
        carbs_g = summed.carbs_g
    if fat_g is None:
        fat_g = summed.fat_g

    health_score = calculate_nutrition_score(
        calories=total_calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        ultra_processed=ultra_processed,
    )
    log_id = str(uuid4())
    created = iso_utc(created_at)
    meal_key = normalize_meal_key(meal_type)

    with db_conn(settings.db_path) as conn:
        conn.execute(
            """
            INSERT INTO food_logs (
                id, user_id, created_at, image_url, source, items_json,
                total_calories, protein_g, carbs_g, fat_g, meal_type, corrected, health_score
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                log_id,
                user_id,
                created,
                image_url,
                source,
                json.dumps(items, ensure_ascii=False),
                total_calories,
                protein_g,
                carbs_g,
                fat_g,
                meal_key,
                1 if corrected else 0,
                health_score,
            ),
        )
    logger.info("food log %s saved (%s, %.0f kcal, score %d)", log_id, meal_key, total_calories, health_score)
    return {
        "id": log_id,
        "created_at": created,
        "meal_type": meal_key,
        "source": source,
        "image_url": image_url,
        "items": items,
        "total_calories": total_calories,
        "protein_g": protein_g,
        "carbs_g": carbs_g,
        "fat_g": fat_g,
        "corrected": corrected,
        "health_score": health_score,
    }


def _log_filters(
    user_id: str, start: Optional[str], end: Optional[str], meal_type: Optional[str]
) -> Tuple[str, List[Any]]:
    clauses = ["user_id = ?"]
    params: List[Any] = [user_id]
    if start:
        clauses.append("substr(created_at, 1, 10) >= ?")
        params.append(start)
    if end:
        clauses.append("substr(created_at, 1, 10) <= ?")
        params.append(end)
    if meal_type:
        clauses.append("meal_type = ?")
        params.append(normalize_meal_key(meal_type))
    return " AND ".join(clauses), params


def list_food_logs(
    user_id: str,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    meal_type: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """Logs newest first; ``start``/``end`` are inclusive YYYY-MM-DD bounds on the UTC date."""
    where, params = _log_filters(user_id, start, end, meal_type)
    sql = f"SELECT * FROM food_logs WHERE {where} ORDER BY created_at DESC, id DESC"
    if limit is not None:
        sql += " LIMIT ? OFFSET ?"
        params += [limit, offset]
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_log(dict(r)) for r in rows]


def count_food_logs(
    user_id: str,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    meal_type: Optional[str] = None,
) -> int:
    where, params = _log_filters(user_id, start, end, meal_type)
    with db_conn(settings.db_path) as conn:
        return int(conn.execute(f"SELECT COUNT(*) FROM food_logs WHERE {where}", params).fetchone()[0])


def list_food_logs_between(user_id: str, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    """Raw rows with ``start <= created_at < end``, oldest first."""
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            """
            SELECT created_at, total_calories, protein_g, carbs_g, fat_g, meal_type
            FROM food_logs
            WHERE user_id = ? AND created_at >= ? AND created_at < ?
            ORDER BY created_at ASC
            """,
            (user_id, iso_utc(start), iso_utc(end)),
        ).fetchall()
    return [dict(r) for r in rows]


def delete_food_log(user_id: str, log_id: str) -> bool:
    with db_conn(settings.db_path) as conn:
        cur = conn.execute("DELETE FROM food_logs WHERE id = ? AND user_id = ?", (log_id, user_id))
        return cur.rowcount > 0
