# -*- coding: utf-8 -*-
"""Password hashing with PBKDF2-HMAC-SHA256.

Stored format: ``pbkdf2_sha256$<iterations>$<salt>$<digest>`` with
unpadded urlsafe base64 for salt and digest.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import NamedTuple

from .tokens import b64url_decode, b64url_encode

SCHEME = "pbkdf2_sha256"
ITERATIONS = 200_000
SALT_BYTES = 16


class _Parsed(NamedTuple):
    iterations: int
    salt: bytes
    digest: bytes


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def _parse(stored: str) -> _Parsed | None:
    parts = stored.split("$")
    if len(parts) != 4 or parts[0] != SCHEME:
        return None
    try:
        return _Parsed(int(parts[1]), b64url_decode(parts[2]), b64url_decode(parts[3]))
    except ValueError:
        return None


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _derive(password, salt, ITERATIONS)
    return "$".join([SCHEME, str(ITERATIONS), b64url_encode(salt), b64url_encode(digest)])


def verify_password(password: str, stored: str) -> bool:
    parsed = _parse(stored or "")
    if parsed is None or parsed.iterations <= 0:
        return False
    return hmac.compare_digest(_derive(password, parsed.salt, parsed.iterations), parsed.digest)
