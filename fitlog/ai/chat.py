# -*- coding: utf-8 -*-
"""Assistant chat relayed to the remote AI service."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .client import AiClient

FALLBACK_REPLY = "Sorry, I could not reach the AI service. Please try again."
EMPTY_REPLY = "Got it."


def send_chat(
    client: AiClient,
    *,
    message: str,
    history: List[Dict[str, str]],
    user_id: Optional[str],
) -> Dict[str, Any]:
    """Relay one chat turn; a failed call degrades to a canned reply instead of an error."""
    result = client.post("/chat", {"message": message, "history": history, "userId": user_id})
    if not result.ok:
        return {"status": "degraded", "reply": FALLBACK_REPLY, "error": result.error}
    reply = result.data.get("reply") if isinstance(result.data, dict) else None
    if not isinstance(reply, str) or not reply.strip():
        reply = EMPTY_REPLY
    return {"status": "ok", "reply": reply, "error": None}
