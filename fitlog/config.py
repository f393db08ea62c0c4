from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the fitlog backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITLOG_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("FITLOG_DB_PATH") or (self.data_root / "fitlog.db")
        ).expanduser()
        # In production you MUST set FITLOG_JWT_SECRET. The dev secret keeps local runs simple.
        self.jwt_secret: str = os.environ.get("FITLOG_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("FITLOG_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("FITLOG_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}

        # Remote AI service (chat, food analysis, exercise lookup).
        # Values pasted from .env files often keep their quotes.
        self.ai_base_url: str = (os.environ.get("FITLOG_AI_BASE_URL") or "").replace("'", "").strip()
        self.ai_timeout: float = float(os.environ.get("FITLOG_AI_TIMEOUT") or "30")
        self.max_image_bytes: int = int(os.environ.get("FITLOG_MAX_IMAGE_BYTES") or "1500000")

        self.default_tz: str = (os.environ.get("FITLOG_DEFAULT_TZ") or "UTC").strip() or "UTC"

        cors = os.environ.get("FITLOG_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
