# -*- coding: utf-8 -*-
"""Weekly nutrition aggregation.

Food log rows are bucketed into a Monday-indexed week in the caller's local
timezone, summed per day and per meal type, with the calories that the
macros do not explain tracked separately as ``other``.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .macros import KCAL_PER_G_CARBS, KCAL_PER_G_FAT, KCAL_PER_G_PROTEIN, calculate_other_calories, macro_calories
from .models import DayStats, MacroCalories, MealStats

WEEK_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MEAL_KEYS = ("Breakfast", "Lunch", "Brunch", "Dinner", "Snacks")

_MEAL_ALIASES = {
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "brunch": "Brunch",
    "dinner": "Dinner",
    "snack": "Snacks",
    "snacks": "Snacks",
}


def resolve_tz(name: Optional[str]) -> tzinfo:
    """Map an IANA zone name to tzinfo; raises ValueError for unknown zones."""
    key = (name or "").strip()
    if not key or key.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {key}") from exc


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z") or raw.endswith("z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_monday_index(value: datetime | date) -> int:
    return value.weekday()


def week_bounds(reference: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Local midnight of the reference week's Monday and of the following Monday."""
    monday = reference - timedelta(days=to_monday_index(reference))
    start = datetime.combine(monday, time.min, tzinfo=tz)
    # Wall-clock arithmetic on aware datetimes keeps local midnight across DST shifts.
    end = datetime.combine(monday + timedelta(days=7), time.min, tzinfo=tz)
    return start, end


def normalize_meal_key(raw: Any) -> str:
    key = str(raw if raw is not None else "").strip().lower()
    return _MEAL_ALIASES.get(key, "Snacks")


def _num(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def empty_day(label: str, day: date) -> DayStats:
    return DayStats(
        label=label,
        date=day.isoformat(),
        meals={key: MealStats() for key in MEAL_KEYS},
    )


def empty_week(week_start: date) -> List[DayStats]:
    return [empty_day(label, week_start + timedelta(days=i)) for i, label in enumerate(WEEK_DAYS)]


def _add(target: Any, calories: float, protein: float, carbs: float, fat: float, other: float) -> None:
    target.calories += calories
    target.protein += protein
    target.carbs += carbs
    target.fat += fat
    target.other += other


def _finalize(day: DayStats) -> DayStats:
    for meal in day.meals.values():
        meal.calories = round(meal.calories, 1)
        meal.protein = round(meal.protein, 1)
        meal.carbs = round(meal.carbs, 1)
        meal.fat = round(meal.fat, 1)
        meal.other = round(meal.other, 1)
    day.macro_calories = MacroCalories(
        protein_kcal=round(day.protein * KCAL_PER_G_PROTEIN, 1),
        carbs_kcal=round(day.carbs * KCAL_PER_G_CARBS, 1),
        fat_kcal=round(day.fat * KCAL_PER_G_FAT, 1),
        other_kcal=round(day.other, 1),
    )
    day.calories = round(day.calories, 1)
    day.protein = round(day.protein, 1)
    day.carbs = round(day.carbs, 1)
    day.fat = round(day.fat, 1)
    day.other = round(day.other, 1)
    return day


def aggregate_week(
    rows: Iterable[Dict[str, Any]],
    *,
    tz: tzinfo,
    week_start: date,
) -> List[DayStats]:
    """Sum food log rows into seven day buckets starting at ``week_start``.

    Rows outside the week or with an unparsable ``created_at`` are skipped.
    Missing macros count as 0; a missing calorie total falls back to the
    calories implied by the macros.
    """
    days = empty_week(week_start)
    start, end = week_bounds(week_start, tz)

    for row in rows:
        created_at = parse_timestamp(row.get("created_at"))
        if created_at is None or not (start <= created_at < end):
            continue
        local = created_at.astimezone(tz)
        day_index = to_monday_index(local)

        protein = _num(row.get("protein_g"), 0.0)
        carbs = _num(row.get("carbs_g"), 0.0)
        fat = _num(row.get("fat_g"), 0.0)
        total = _num(row.get("total_calories"), macro_calories(protein, carbs, fat))
        other = calculate_other_calories(total, protein, carbs, fat)

        day = days[day_index]
        _add(day, total, protein, carbs, fat, other)
        day.entry_count += 1
        meal = day.meals.setdefault(normalize_meal_key(row.get("meal_type")), MealStats())
        _add(meal, total, protein, carbs, fat, other)

    return [_finalize(day) for day in days]


def has_data(days: List[DayStats]) -> bool:
    return any(day.calories > 0 for day in days)


def logging_streak(days: List[DayStats], today_index: int) -> int:
    """Consecutive logged days counting back from today, wrapping inside the week."""
    count = 0
    for i in range(len(WEEK_DAYS)):
        idx = (today_index - i + 7) % 7
        if idx < len(days) and days[idx].calories > 0:
            count += 1
        else:
            break
    return count
