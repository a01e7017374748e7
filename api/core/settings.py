"""
Environment-backed settings.

Values are read on every call (not cached) so they can be changed per test
with `monkeypatch.setenv`.
"""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "Careguard API"
APP_VERSION = "1.0.0"

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def app_env() -> str:
    return env_str("APP_ENV", "development")


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def upload_root() -> Path:
    return Path(env_str("UPLOAD_ROOT", "uploads"))


def max_upload_bytes() -> int:
    value = env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    if value <= 0:
        return DEFAULT_MAX_UPLOAD_BYTES
    return value
