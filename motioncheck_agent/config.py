from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from the repo root .env (local dev); real env vars win.
_HERE = Path(__file__).resolve()
_AGENT_ROOT = _HERE.parents[1]

DEFAULT_PROXY_BASE = "https://api.allorigins.win"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 MotionCheckAgent/1.0"
)

MAX_FILE_FETCH_ATTEMPTS = 15
FILE_FETCH_DELAY_MS = 1000
MAX_SITE_FETCH_ATTEMPTS = 10
SITE_FETCH_DELAY_MS = 2000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _cors_allow_origins() -> list[str]:
    raw = os.getenv("MOTIONCHECK_CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:3000"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    proxy_base: str = DEFAULT_PROXY_BASE
    file_fetch_attempts: int = MAX_FILE_FETCH_ATTEMPTS
    file_fetch_delay_ms: int = FILE_FETCH_DELAY_MS
    site_fetch_attempts: int = MAX_SITE_FETCH_ATTEMPTS
    site_fetch_delay_ms: int = SITE_FETCH_DELAY_MS
    timeout_ms: int = 20000
    user_agent: str = DEFAULT_USER_AGENT
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv(_AGENT_ROOT / ".env", override=False)
    return Settings(
        proxy_base=os.getenv("MOTIONCHECK_PROXY_BASE", DEFAULT_PROXY_BASE).strip().rstrip("/") or DEFAULT_PROXY_BASE,
        file_fetch_attempts=max(1, _env_int("MOTIONCHECK_FILE_FETCH_ATTEMPTS", MAX_FILE_FETCH_ATTEMPTS)),
        file_fetch_delay_ms=max(0, _env_int("MOTIONCHECK_FILE_FETCH_DELAY_MS", FILE_FETCH_DELAY_MS)),
        site_fetch_attempts=max(1, _env_int("MOTIONCHECK_SITE_FETCH_ATTEMPTS", MAX_SITE_FETCH_ATTEMPTS)),
        site_fetch_delay_ms=max(0, _env_int("MOTIONCHECK_SITE_FETCH_DELAY_MS", SITE_FETCH_DELAY_MS)),
        timeout_ms=max(1000, _env_int("MOTIONCHECK_TIMEOUT_MS", 20000)),
        user_agent=os.getenv("MOTIONCHECK_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
        cors_origins=_cors_allow_origins(),
        log_level=os.getenv("MOTIONCHECK_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
