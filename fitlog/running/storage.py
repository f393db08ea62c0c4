# -*- coding: utf-8 -*-
"""Running sessions: storage and daily aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from ..app_db import db_conn, iso_utc
from ..config import settings
from .models import RunDay

logger = logging.getLogger(__name__)

# Rule of thumb: running costs about 1 kcal per kg body weight per km.
KCAL_PER_KG_KM = 1.0
DEFAULT_WEIGHT_KG = 70.0
MAX_SUMMARY_DAYS = 366


def pace_s_per_km(duration_s: float, distance_m: float) -> Optional[float]:
    if distance_m <= 0:
        return None
    return round(duration_s / (distance_m / 1000.0), 1)


def speed_kmh(duration_s: float, distance_m: float) -> Optional[float]:
    if duration_s <= 0:
        return None
    return round((distance_m / 1000.0) / (duration_s / 3600.0), 2)


def estimate_calories(distance_m: float, weight_kg: Optional[float]) -> float:
    return round((weight_kg or DEFAULT_WEIGHT_KG) * (distance_m / 1000.0) * KCAL_PER_KG_KM, 1)


def _row_to_run(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "started_at": row["started_at"],
        "duration_s": row["duration_s"],
        "distance_m": row["distance_m"],
        "calories_kcal": row.get("calories_kcal"),
        "calories_estimated": bool(row.get("calories_estimated")),
        "notes": row.get("notes"),
        "pace_s_per_km": pace_s_per_km(row["duration_s"], row["distance_m"]),
        "speed_kmh": speed_kmh(row["duration_s"], row["distance_m"]),
        "created_at": row["created_at"],
    }


def create_run(
    user_id: str,
    *,
    started_at: datetime,
    duration_s: float,
    distance_m: float,
    calories_kcal: Optional[float],
    notes: Optional[str],
    weight_kg: Optional[float] = None,
) -> Dict[str, Any]:
    estimated = calories_kcal is None
    if estimated:
        calories_kcal = estimate_calories(distance_m, weight_kg)
    run_id = str(uuid4())
    row = {
        "id": run_id,
        "started_at": iso_utc(started_at),
        "duration_s": float(duration_s),
        "distance_m": float(distance_m),
        "calories_kcal": calories_kcal,
        "calories_estimated": estimated,
        "notes": notes,
        "created_at": iso_utc(),
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            """
            INSERT INTO run_sessions (
                id, user_id, started_at, duration_s, distance_m, calories_kcal, calories_estimated, notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                run_id,
                user_id,
                row["started_at"],
                row["duration_s"],
                row["distance_m"],
                row["calories_kcal"],
                1 if estimated else 0,
                notes,
                row["created_at"],
            ),
        )
    logger.info("run %s saved (%.0f m in %.0f s)", run_id, distance_m, duration_s)
    return _row_to_run(row)


def list_runs(user_id: str, *, start: Optional[str] = None, end: Optional[str] = None) -> List[Dict[str, Any]]:
    """Runs newest first; ``start``/``end`` are inclusive YYYY-MM-DD bounds."""
    clauses = ["user_id = ?"]
    params: List[Any] = [user_id]
    if start:
        clauses.append("substr(started_at, 1, 10) >= ?")
        params.append(start)
    if end:
        clauses.append("substr(started_at, 1, 10) <= ?")
        params.append(end)
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM run_sessions WHERE {' AND '.join(clauses)} ORDER BY started_at DESC",
            params,
        ).fetchall()
    return [_row_to_run(dict(r)) for r in rows]


def _iter_days(start: str, end: str) -> Tuple[List[str], Optional[str]]:
    """Every YYYY-MM-DD in the inclusive range, or an empty list and the reason it was rejected."""
    try:
        first = date.fromisoformat(start)
        last = date.fromisoformat(end)
    except ValueError:
        return [], "Invalid date range"
    if last < first:
        return [], "Invalid date range"
    span = (last - first).days + 1
    if span > MAX_SUMMARY_DAYS:
        return [], f"Date range too long: {span} days (max {MAX_SUMMARY_DAYS})"
    return [(first + timedelta(days=i)).isoformat() for i in range(span)], None


@dataclass
class _Agg:
    distance_m: float = 0.0
    duration_s: float = 0.0
    calories_kcal: float = 0.0
    run_count: int = 0


def summarize_runs(user_id: str, *, start: str, end: str) -> Tuple[List[RunDay], List[str]]:
    days, problem = _iter_days(start, end)
    if problem:
        return [], [problem]
    per_day: Dict[str, _Agg] = {d: _Agg() for d in days}
    for run in list_runs(user_id, start=start, end=end):
        agg = per_day.get(run["started_at"][:10])
        if agg is None:
            continue
        agg.distance_m += run["distance_m"]
        agg.duration_s += run["duration_s"]
        agg.calories_kcal += run.get("calories_kcal") or 0.0
        agg.run_count += 1

    out = [
        RunDay(
            date=day,
            distance_m=round(per_day[day].distance_m, 1),
            duration_s=round(per_day[day].duration_s, 1),
            calories_kcal=round(per_day[day].calories_kcal, 1),
            run_count=per_day[day].run_count,
        )
        for day in days
    ]
    return out, []
