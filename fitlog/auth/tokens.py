# -*- coding: utf-8 -*-
"""Signed session tokens (compact HS256 JWTs)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

from ..config import settings

_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    """Token is malformed, forged or expired."""


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except ValueError as exc:
        raise ValueError("invalid base64url segment") from exc


def _segment(obj: Dict[str, Any]) -> str:
    return b64url_encode(json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8"))


def _signature(signing_input: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def issue_token(
    *,
    user_id: str,
    email: str,
    ttl_days: Optional[int] = None,
    now: Optional[float] = None,
    secret: Optional[str] = None,
) -> str:
    issued = int(time.time() if now is None else now)
    days = int(settings.token_ttl_days if ttl_days is None else ttl_days)
    claims = {"sub": user_id, "email": email, "iat": issued, "exp": issued + days * 86400}
    signing_input = f"{_segment(_HEADER)}.{_segment(claims)}"
    return f"{signing_input}.{b64url_encode(_signature(signing_input, secret or settings.jwt_secret))}"


def read_token(token: str, *, now: Optional[float] = None, secret: Optional[str] = None) -> Dict[str, Any]:
    """Verify signature and expiry; returns the claims or raises TokenError."""
    header_b64, sep, rest = token.partition(".")
    claims_b64, sep2, sig_b64 = rest.partition(".")
    if not sep or not sep2 or "." in sig_b64:
        raise TokenError("Invalid token")
    signing_input = f"{header_b64}.{claims_b64}"
    try:
        given = b64url_decode(sig_b64)
        claims = json.loads(b64url_decode(claims_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise TokenError("Invalid token") from exc
    if not hmac.compare_digest(_signature(signing_input, secret or settings.jwt_secret), given):
        raise TokenError("Invalid token")
    if not isinstance(claims, dict) or not claims.get("sub"):
        raise TokenError("Invalid token")
    expires = int(claims.get("exp") or 0)
    if expires and expires < int(time.time() if now is None else now):
        raise TokenError("Token expired")
    return claims
