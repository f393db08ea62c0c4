# -*- coding: utf-8 -*-
"""Food photo analysis via the remote AI service.

The remote model is loosely typed: totals may be missing, numbers may come
back as strings ("250 kcal") and keys vary between revisions. Everything is
normalized here into the food log item schema.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..food_logs.models import FoodItem
from ..food_logs.storage import compute_totals
from .client import AiClient, ApiResult

logger = logging.getLogger(__name__)


class FoodAnalysis(BaseModel):
    items: List[FoodItem] = Field(default_factory=list)
    total_calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    warnings: List[str] = Field(default_factory=list)


class FoodAnalysisError(RuntimeError):
    """The remote service could not analyze the image."""


_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUM_RE.search(value.replace(",", ""))
        return float(m.group(0)) if m else None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        return [s] if s else []
    if isinstance(value, list):
        return [str(x).strip() for x in value if x is not None and str(x).strip()]
    s = str(value).strip()
    return [s] if s else []


def _pick_num(raw: Dict[str, Any], keys: List[str]) -> Optional[float]:
    for k in keys:
        if k in raw:
            val = _coerce_float(raw.get(k))
            if val is not None:
                return max(0.0, val)
    return None


def _normalize_items(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    out: List[Dict[str, Any]] = []
    for raw in items:
        if isinstance(raw, str) and raw.strip():
            out.append({"name": raw.strip()})
            continue
        if not isinstance(raw, dict):
            continue
        name = raw.get("name") or raw.get("food") or raw.get("item")
        item: Dict[str, Any] = {"name": (str(name).strip() if name else "") or "unknown"}
        portion = raw.get("portion") or raw.get("serving")
        if isinstance(portion, str) and portion.strip():
            item["portion"] = portion.strip()
        fields = {
            "grams": ["grams", "weight_g", "weight"],
            "calories": ["calories", "kcal", "calories_kcal", "energy_kcal"],
            "protein_g": ["protein_g", "protein"],
            "carbs_g": ["carbs_g", "carbs", "carbohydrates"],
            "fat_g": ["fat_g", "fat"],
        }
        for key, aliases in fields.items():
            val = _pick_num(raw, aliases)
            if val is not None:
                item[key] = val
        confidence = _pick_num(raw, ["confidence"])
        if confidence is not None:
            if 1 < confidence <= 100:
                confidence = confidence / 100.0
            item["confidence"] = min(1.0, confidence)
        out.append(item)
    return out


def normalize_analysis(payload: Any) -> FoodAnalysis:
    """Turn a remote analysis payload into a FoodAnalysis; never raises."""
    if not isinstance(payload, dict):
        return FoodAnalysis(warnings=["Analysis returned no data; add food items manually."])

    items = _normalize_items(payload.get("items") if "items" in payload else payload.get("foods"))
    summed = compute_totals(items)
    warnings = _as_str_list(payload.get("warnings") if "warnings" in payload else payload.get("warning"))

    def total(keys: List[str], fallback: float) -> float:
        val = _pick_num(payload, keys)
        return round(val, 1) if val is not None else fallback

    try:
        return FoodAnalysis(
            items=items,
            total_calories=total(["totalCalories", "total_calories", "calories"], summed.total_calories),
            protein_g=total(["protein_g", "protein"], summed.protein_g),
            carbs_g=total(["carbs_g", "carbs"], summed.carbs_g),
            fat_g=total(["fat_g", "fat"], summed.fat_g),
            warnings=warnings,
        )
    except ValidationError as exc:
        logger.warning("food analysis payload rejected: %s", exc)
        return FoodAnalysis(warnings=["Analysis output was malformed; add food items manually."])


def analyze_food(client: AiClient, *, image_base64: Optional[str] = None, image_url: Optional[str] = None) -> FoodAnalysis:
    body: Dict[str, Any] = {}
    if image_base64:
        body["imageBase64"] = image_base64
    if image_url:
        body["imageUrl"] = image_url
    result: ApiResult = client.post("/food/analyze", body)
    if not result.ok:
        raise FoodAnalysisError(result.error or "Food analysis failed")
    return normalize_analysis(result.data)
