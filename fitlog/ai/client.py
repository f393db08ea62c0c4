# -*- coding: utf-8 -*-
"""Remote AI service — thin JSON REST client.

Calls never raise: transport failures, non-JSON bodies and HTTP errors are
reported through ``ApiResult.error`` so endpoints can decide how to surface them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "API base URL not configured"


@dataclass
class ApiResult:
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_base_url(raw: Optional[str]) -> str:
    return (raw or "").replace("'", "").strip().rstrip("/")


class AiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = normalize_base_url(settings.ai_base_url if base_url is None else base_url)
        self.timeout = float(settings.ai_timeout if timeout is None else timeout)
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    def get(self, path: str) -> ApiResult:
        return self._request("GET", path)

    def post(self, path: str, body: Any) -> ApiResult:
        return self._request("POST", path, json=body)

    def _request(self, method: str, path: str, json: Any = None) -> ApiResult:
        if not self.base_url:
            return ApiResult(error=NOT_CONFIGURED)
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Accept": "application/json"}
        if method == "POST":
            headers["Content-Type"] = "application/json"
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self._transport) as client:
                resp = client.request(method, url, headers=headers, json=json)
                content_type = (resp.headers.get("content-type") or "").lower()
                if "application/json" not in content_type:
                    snippet = (resp.text or "")[:100]
                    logger.warning("AI service %s %s returned non-JSON (%s)", method, path, resp.status_code)
                    return ApiResult(error=f"Invalid response format: {resp.status_code} {snippet}")
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("AI service %s %s failed: %s", method, path, exc)
            return ApiResult(error=str(exc) or exc.__class__.__name__)

        if resp.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            return ApiResult(data=data, error=str(message) if message else f"Request failed: {resp.status_code}")
        return ApiResult(data=data)


def get_ai_client() -> AiClient:
    """FastAPI dependency; tests override it with a client on a mock transport."""
    return AiClient()


def api_get(path: str) -> ApiResult:
    return get_ai_client().get(path)


def api_post(path: str, body: Any) -> ApiResult:
    return get_ai_client().post(path, body)
