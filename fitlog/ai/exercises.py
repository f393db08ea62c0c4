# -*- coding: utf-8 -*-
"""Exercise catalogue lookups against the remote AI service."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from .client import AiClient


class ExerciseLookupError(RuntimeError):
    pass


LIST_ERROR = "Unable to load exercises."


_SEARCH_FIELDS = ("name", "bodyPart", "target", "equipment")


def matches_query(exercise: Dict[str, Any], query: Optional[str]) -> bool:
    """Case-insensitive substring match over name, body part, target, equipment and secondary muscles."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    words = [str(exercise[k]) for k in _SEARCH_FIELDS if exercise.get(k)]
    secondary = exercise.get("secondaryMuscles")
    if isinstance(secondary, list):
        words.extend(str(m) for m in secondary if m)
    return needle in " ".join(words).lower()


def list_exercises(
    client: AiClient, body_part: Optional[str] = None, query: Optional[str] = None
) -> List[Dict[str, Any]]:
    path = "/exercises"
    if body_part and body_part != "all":
        path = f"{path}?{urlencode({'bodyPart': body_part})}"
    result = client.get(path)
    if not result.ok:
        raise ExerciseLookupError(result.error or LIST_ERROR)
    if not isinstance(result.data, list):
        raise ExerciseLookupError(LIST_ERROR)
    return [e for e in result.data if isinstance(e, dict) and matches_query(e, query)]


def list_body_parts(client: AiClient) -> List[str]:
    """Body parts offered by the catalogue, with the ``all`` filter first."""
    result = client.get("/exercises/body-parts")
    if not result.ok:
        raise ExerciseLookupError(result.error or LIST_ERROR)
    if not isinstance(result.data, list):
        raise ExerciseLookupError(LIST_ERROR)
    parts = ["all"]
    for part in result.data:
        name = str(part).strip() if part is not None else ""
        if name and name not in parts:
            parts.append(name)
    return parts


def get_exercise(client: AiClient, exercise_id: str) -> Dict[str, Any]:
    result = client.get(f"/exercises/{quote(exercise_id, safe='')}")
    if not result.ok:
        raise ExerciseLookupError(result.error or "Exercise not found")
    if not isinstance(result.data, dict):
        raise ExerciseLookupError("Exercise not found")
    return result.data
